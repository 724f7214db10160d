"""VoiceDesk - voice command control for a task and finance workspace.

Components:
    voice/: Voice command pipeline (normalize, classify, extract, dispatch,
            synthesize feedback) and the session state machine
    logging_config.py: structlog configuration
    cli.py: Console driver for typed commands
"""

from pathlib import Path

# Path constants
PROJECT_ROOT = Path(__file__).parent.parent
ARGS_DIR = PROJECT_ROOT / "args"
CONFIG_PATH = ARGS_DIR / "voice.yaml"

__version__ = "0.1.0"

__all__ = [
    "ARGS_DIR",
    "CONFIG_PATH",
    "PROJECT_ROOT",
    "__version__",
]
