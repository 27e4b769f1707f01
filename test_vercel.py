import importlib.util
import inspect
import os

from relay.api import app

ENTRYPOINT = os.path.join(os.path.dirname(__file__), "api", "telegram.py")


def load_entrypoint():
    spec = importlib.util.spec_from_file_location("vercel_telegram_entry", ENTRYPOINT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_entrypoint_exposes_relay_asgi_app():
    module = load_entrypoint()

    assert module.app is app


def test_entrypoint_has_no_function_handler():
    # Vercel requires any `handler` to be a BaseHTTPRequestHandler subclass
    module = load_entrypoint()

    handler = getattr(module, "handler", None)
    assert not inspect.isfunction(handler)
