"""Test setup for foliopress."""

from __future__ import annotations

import django
import pytest
from django.conf import settings


def pytest_configure(config: pytest.Config) -> None:
    """Configure a minimal Django project and register custom markers.

    Tests that call Pandoc are marked so they can be skipped where the
    binary is unavailable:
        pytest -m "not pandoc"
    """
    if not settings.configured:
        settings.configure(
            DEBUG=False,
            SECRET_KEY="foliopress-tests",
            INSTALLED_APPS=["foliopress"],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "DIRS": [],
                    "APP_DIRS": True,
                    "OPTIONS": {},
                }
            ],
            FOLIOPRESS_MARKDOWN={},
        )
        django.setup()

    config.addinivalue_line(
        "markers",
        "pandoc: marks tests that run the Pandoc binary through pypandoc",
    )


@pytest.fixture
def settings_override():
    """Temporarily replace FOLIOPRESS_MARKDOWN; restored after the test."""
    original = settings.FOLIOPRESS_MARKDOWN

    def apply(**values):
        settings.FOLIOPRESS_MARKDOWN = {**original, **values}

    yield apply
    settings.FOLIOPRESS_MARKDOWN = original
