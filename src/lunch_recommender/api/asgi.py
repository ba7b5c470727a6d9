"""ASGI entrypoint for the lunch recommender API."""

from lunch_recommender.api.app import create_app
from lunch_recommender.containers import build_container

app = create_app(build_container())
