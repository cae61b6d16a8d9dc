"""Two-candidate worker path resolution."""

from __future__ import annotations

from pathlib import Path

from orka_plugins.utils.exceptions import WorkerNotFound

DEFAULT_WORKER_SUBDIR = "worker"
DEFAULT_WORKER_ENTRY = "index.py"


def package_dir() -> Path:
    """Directory of the installed orka_plugins package."""
    return Path(__file__).resolve().parents[1]


class WorkerPathResolver:
    """Find ``<subdir>/<entry>`` next to the installed package, else under the cwd.

    The second candidate lets the bridge run straight from a source checkout.
    No other location is searched.
    """

    def __init__(
        self,
        entry: str = DEFAULT_WORKER_ENTRY,
        subdir: str = DEFAULT_WORKER_SUBDIR,
        base_dir: str | Path | None = None,
        cwd: str | Path | None = None,
    ):
        self.entry = entry
        self.subdir = subdir
        self.base_dir = Path(base_dir).expanduser() if base_dir else package_dir()
        self.cwd = Path(cwd) if cwd else None

    def candidates(self) -> tuple[Path, Path]:
        cwd = self.cwd if self.cwd is not None else Path.cwd()
        primary = self.base_dir / self.subdir / self.entry
        fallback = cwd / self.subdir / self.entry
        return primary, fallback

    def resolve(self) -> Path:
        primary, fallback = self.candidates()
        for candidate in (primary, fallback):
            if candidate.exists():
                return candidate
        raise WorkerNotFound(str(primary), searched=[str(primary), str(fallback)])
