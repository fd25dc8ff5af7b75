# backend/notifeed/__main__.py

from notifeed.server import run

if __name__ == "__main__":
    run()
