import sys

from lan_share.backend.app.runner import run as api_run
from lan_share.shared.proc import terminate_tree


def main() -> int:
    api_proc = api_run()
    try:
        # uvicorn exits non-zero when the port cannot be bound or startup fails
        code = api_proc.wait()
    except KeyboardInterrupt:
        print("\n Ctrl+C received, shutting down...")
        terminate_tree(api_proc)
        return 0
    if code:
        print(f"Server exited with status {code}", file=sys.stderr)
    return code


if __name__ == "__main__":
    sys.exit(main())
