"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from refine import Instrumenter, Settings

_TESTS_ROOT = Path(__file__).parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_TESTS_ROOT)
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared unit-test fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def instrumenter(settings: Settings) -> Instrumenter:
    return Instrumenter(settings)


@pytest.fixture
def plain_only() -> Instrumenter:
    """Instrumenter that only annotates plain HTML tags."""
    return Instrumenter(Settings(instrument_components=False))


@pytest.fixture
def components_only() -> Instrumenter:
    """Instrumenter that only annotates component tags."""
    return Instrumenter(Settings(target_tags=()))


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template root holding a few ``.tmpl`` files."""
    root = tmp_path / "views"
    (root / "components").mkdir(parents=True)
    (root / "components" / "alert.tmpl").write_text('<div class="alert">\n  <p>Careful</p>\n</div>\n', encoding="utf-8")
    (root / "welcome.tmpl").write_text("<main>\n  <h1>Hello</h1>\n</main>\n", encoding="utf-8")
    return root
