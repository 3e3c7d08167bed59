"""Server entry point of this Discord Mini App.

Run with ``python app.py``; the built client is served from ./static in
production.
"""

from miniapp.config import Settings
from miniapp.main import run

if __name__ == "__main__":
    run(Settings(client_dist_dir="static"))
