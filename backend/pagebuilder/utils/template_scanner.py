# pagebuilder/utils/template_scanner.py
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Sequence

from pagebuilder.domain.exceptions import TemplateRootUnavailable

DEFAULT_CONFIG_FILENAMES = ("config", "config.yaml", "config.yml", "config.json")


@dataclass(frozen=True)
class TemplateDirectory:
    name: str
    path: Path
    config_path: Optional[Path] = None

    @property
    def has_config(self) -> bool:
        return self.config_path is not None


def find_config(directory: Path, filenames: Sequence[str] = DEFAULT_CONFIG_FILENAMES) -> Optional[Path]:
    for filename in filenames:
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def scan_template_directories(
    root,
    *,
    config_filenames: Sequence[str] = DEFAULT_CONFIG_FILENAMES,
) -> Iterator[TemplateDirectory]:
    """
    Yield one TemplateDirectory per directory directly under `root`.

    - Not recursive, no ordering guarantee
    - Hidden directories are skipped
    - Raises TemplateRootUnavailable before yielding anything if the
      root cannot be listed
    """
    root = Path(root)

    try:
        entries = list(os.scandir(root))
    except OSError as exc:
        raise TemplateRootUnavailable(root) from exc

    for entry in entries:
        if entry.name.startswith(".") or not entry.is_dir():
            continue

        path = Path(entry.path)
        yield TemplateDirectory(
            name=entry.name,
            path=path,
            config_path=find_config(path, config_filenames),
        )


def is_dynamic_directory(directory: TemplateDirectory, marker: str = "dynamic") -> bool:
    return bool(marker) and marker in directory.name
