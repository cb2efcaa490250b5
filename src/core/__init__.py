"""Core services shared by the artifact decoders: configuration, logging, timestamps."""

from .config import AppConfig, load_app_config  # noqa: F401
