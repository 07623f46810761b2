"""Validation of the paths a batch run depends on."""

from pathlib import Path
from typing import Optional

from cad_batch.domain.exceptions import ConfigurationError
from cad_batch.domain.protocols import IFolderPrompt
from cad_batch.shared.types import PathLike

FOLDER_PROMPT_TITLE = "Select the folder containing the drawings to process"


def resolve_folder(folder: Optional[PathLike], prompt: IFolderPrompt) -> Optional[Path]:
    """
    Return the target folder, asking the operator when none was given.

    Returns:
        The folder path, or None if the operator cancelled the prompt
    """
    if folder is not None and str(folder).strip():
        return Path(folder)

    chosen = prompt(FOLDER_PROMPT_TITLE)
    if chosen is None or not str(chosen).strip():
        return None
    return Path(str(chosen).strip())


def validate_paths(folder: Path, script_file: Path, engine_path: Path) -> None:
    """
    Ensure every required path exists.

    Raises:
        ConfigurationError: Naming the first path that is missing
    """
    if not folder.is_dir():
        raise ConfigurationError(f"Folder not found: {folder}")
    if not script_file.is_file():
        raise ConfigurationError(f"Script file not found: {script_file}")
    if not engine_path.is_file():
        raise ConfigurationError(f"Engine executable not found: {engine_path}")
