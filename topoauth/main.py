import logging

from topoauth.api.main import app

if __name__ == "__main__":
    import os
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    host = os.getenv("TOPOAUTH_HOST", "0.0.0.0")
    port = int(os.getenv("TOPOAUTH_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)
