from pathlib import Path

from visionocr.ocr.exceptions import OcrError
from visionocr.ocr.models import OcrMode, PromptPair

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path) -> str:
    """Load a single prompt template from a file.

    Raises:
        OcrError: if the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise OcrError(f"Failed to load prompt template: {exc}") from exc


def load_prompt_pair(mode: OcrMode, prompt_dir: Path | None = None) -> PromptPair:
    """Load the system/user prompt pair for an extraction mode.

    Templates are named ``{mode}_system.txt`` and ``{mode}_user.txt``.
    """
    if prompt_dir is None:
        prompt_dir = _DEFAULT_PROMPT_DIR
    return PromptPair(
        system_prompt=load_prompt_template(prompt_dir / f"{mode.value}_system.txt"),
        user_prompt=load_prompt_template(prompt_dir / f"{mode.value}_user.txt"),
    )
