#!/usr/bin/env python3
"""Run the fintrack web server."""
import logging

from fintrack.config import get_server_config


def main():
    import uvicorn

    cfg = get_server_config()
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print(f"""
    ╔═══════════════════════════════════════════════════════╗
    ║           fintrack Server                             ║
    ╠═══════════════════════════════════════════════════════╣
    ║  URL: http://{cfg.host}:{cfg.port:<5}                            ║
    ║  API Docs: http://{cfg.host}:{cfg.port:<5}/docs                  ║
    ║  Hot Reload: {str(cfg.reload):<5}                              ║
    ╚═══════════════════════════════════════════════════════╝
    """)

    # uvicorn turns SIGINT/SIGTERM into a lifespan shutdown, which closes
    # the store handle before the process exits.
    uvicorn.run(
        "server.app:app",
        host=cfg.host,
        port=cfg.port,
        reload=cfg.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
