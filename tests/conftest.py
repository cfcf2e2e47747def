from __future__ import annotations

import pytest

from config.config import Settings
from src.clinic_workforce.clinic_workforce.container import assemble_container
from src.clinic_workforce.clinic_workforce.main import create_app
from tests.fakes import InMemoryAttendance, InMemoryBlocks, InMemoryLeave, InMemoryPayroll, make_directory


@pytest.fixture
def settings() -> Settings:
    return Settings(secret_key="test-secret", testing=True, log_level="WARNING")


@pytest.fixture
def container(settings):
    directory = make_directory()
    return assemble_container(
        settings,
        directory_repo=directory,
        blocks_repo=InMemoryBlocks(),
        attendance_repo=InMemoryAttendance(directory),
        leave_repo=InMemoryLeave(),
        payroll_repo=InMemoryPayroll(),
    )


@pytest.fixture
def client(settings, container):
    app = create_app(settings=settings, container=container)
    return app.test_client()
