import subprocess
import sys
from pathlib import Path

from lan_share.backend.app.core.config import settings
from lan_share.shared.proc import popen


def run() -> subprocess.Popen:
    pkg_dir = Path(__file__).resolve().parent
    main_path = pkg_dir / "main.py"
    if not main_path.exists():
        raise FileNotFoundError(f"No main.py found in {main_path}")

    api_cmd = [
        sys.executable,
        "-m", "uvicorn",
        "lan_share.backend.app.main:app",
        "--host", settings.HOST,
        "--port", str(settings.PORT),
        "--log-level", settings.LOG_LEVEL.lower(),
    ]

    print(f"Starting file transfer server on http://{settings.HOST}:{settings.PORT}")
    return popen(api_cmd)
