from pathlib import Path

import pytest

pytest_plugins = ["tests.fixtures.registry"]


@pytest.fixture()
def profile_dir(tmp_path: Path) -> Path:
    """Create an empty user profile directory with the folders collectors read."""
    profile = tmp_path / "Users" / "alice"
    for sub in (
        "AppData/Roaming/Microsoft/Windows/Recent/AutomaticDestinations",
        "AppData/Roaming/Microsoft/Office/Recent",
        "AppData/Local/Microsoft/Edge/User Data/Default",
        "Desktop",
        "Downloads",
        "Documents",
    ):
        (profile / sub).mkdir(parents=True, exist_ok=True)
    return profile
