import logging
import socket

import uvicorn
from mealbook.api.api_run import app
from mealbook.utilities.config import APP_HOST, APP_PORT, DEBUG


def lan_address() -> str:
    """Address other devices on the network can use; loopback if there is none."""
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        try:
            # UDP connect sends nothing, it only selects the outgoing interface
            s.connect(("192.0.2.1", 80))
            return str(s.getsockname()[0])
        except OSError:
            return "127.0.0.1"


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG if DEBUG else logging.INFO)
    print(f"Recipe catalog on http://localhost:{APP_PORT} (Press CTRL+C to quit)")
    address = lan_address()
    if address != "127.0.0.1":
        print(f"Accessible from other devices at: http://{address}:{APP_PORT}")
    uvicorn.run(app, host=APP_HOST, port=APP_PORT)
