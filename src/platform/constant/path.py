from pathlib import Path


# Project root (src/platform/constant -> root)
BASE_DIR = Path(__file__).resolve().parents[3]

# Rotating file logs, only written in DEBUG mode
LOG_DIR = BASE_DIR / 'logs'
