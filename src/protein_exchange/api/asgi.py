"""ASGI entrypoint for the protein exchange API."""

from protein_exchange.api.app import create_app
from protein_exchange.containers import build_container

app = create_app(build_container())
