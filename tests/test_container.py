"""Tests for container wiring."""

import asyncio

from nutricoach.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.profile_service.default_timezone == "UTC"
    assert container.extraction_service.model == settings.openai_model
    assert container.recap_service.profile_service is container.profile_service
    asyncio.run(container.close_resources())
