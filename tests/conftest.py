# tests/conftest.py
from __future__ import annotations

from pathlib import Path

import pytest

APPMANIFEST_730 = """"AppState"
{
\t"appid"\t\t"730"
\t"universe"\t\t"1"
\t"LauncherPath"\t\t"C:\\\\Program Files (x86)\\\\Steam\\\\steam.exe"
\t"name"\t\t"Counter-Strike 2"
\t"StateFlags"\t\t"4"
\t"installdir"\t\t"Counter-Strike Global Offensive"
\t"LastUpdated"\t\t"1718216334"
\t"SizeOnDisk"\t\t"35048616843"
\t"buildid"\t\t"14770285"
\t"LastOwner"\t\t"76561198000000000"
\t"AutoUpdateBehavior"\t\t"0"
\t"AllowOtherDownloadsWhileRunning"\t\t"0"
\t"ScheduledAutoUpdate"\t\t"0"
\t"InstalledDepots"
\t{
\t\t"2347771"
\t\t{
\t\t\t"manifest"\t\t"734964044453497128"
\t\t\t"size"\t\t"5476301489"
\t\t}
\t\t"2347770"
\t\t{
\t\t\t"manifest"\t\t"4381408236063385720"
\t\t\t"size"\t\t"29572315354"
\t\t}
\t}
\t"SharedDepots"
\t{
\t\t"228988"\t\t"228980"
\t}
\t"UserConfig"
\t{
\t\t"language"\t\t"english"
\t}
\t"MountedConfig"
\t{
\t\t"language"\t\t"english"
\t}
}
"""


@pytest.fixture
def appmanifest_text() -> str:
    """A realistic appmanifest_730.acf as written by the Steam client."""
    return APPMANIFEST_730


@pytest.fixture
def appmanifest_file(tmp_path: Path) -> Path:
    """The appmanifest fixture written to disk."""
    path = tmp_path / "appmanifest_730.acf"
    path.write_text(APPMANIFEST_730, encoding="utf-8")
    return path


@pytest.fixture
def write_acf(tmp_path: Path):
    """Factory writing arbitrary text to a .acf file under tmp_path."""

    def _write(content: str, name: str = "test.acf", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write
