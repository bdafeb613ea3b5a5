"""
Server start script
"""
import argparse
import sys
import uvicorn
from config.settings import settings

APPS = {
    "chat": ("brenin.api.main:app", settings.api_port),
    "info": ("brenin.api.info_service:app", settings.info_service_port),
}


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Brenin chat API or the info service")
    parser.add_argument("service", nargs="?", choices=sorted(APPS), default="chat")
    parser.add_argument("--host", default=settings.api_host)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    app_path, default_port = APPS[args.service]
    try:
        uvicorn.run(
            app_path,
            host=args.host,
            port=args.port or default_port,
            reload=args.reload,
            log_level=settings.log_level.lower()
        )
    except KeyboardInterrupt:
        print("\nServer stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
