"""Shared fixtures for the presence monitor tests."""

import pytest

from tests.fakes import NMAP_XML, RecordingNotifier


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def nmap_xml():
    return NMAP_XML
