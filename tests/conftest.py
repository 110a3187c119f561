import pytest


@pytest.fixture
def exports() -> dict[str, str]:
    return {}


@pytest.fixture
def style_path() -> str:
    return "/style.css"
