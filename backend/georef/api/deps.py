# backend/georef/api/deps.py
from fastapi import Request

from georef.config import Settings
from georef.services.ollama.client import OllamaClient


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ollama(request: Request) -> OllamaClient:
    # built once in create_app and shared by every request
    return request.app.state.ollama
