"""HTTP front ends of the wallet and balance services."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from flask import Flask, Response, request

from .balance_usecases import GetBalanceByAccountInput, GetBalanceByAccountUseCase
from .wallet_usecases import (
    CreateAccountInput,
    CreateAccountUseCase,
    CreateClientInput,
    CreateClientUseCase,
    CreateTransactionInput,
    CreateTransactionUseCase,
)

logger = logging.getLogger(__name__)

JSON_MIMETYPE = "application/json"


@dataclass(frozen=True)
class Route:
    """A view bound to an HTTP method and a path (Flask path syntax)."""

    path: str
    handler: Callable[..., Any]
    method: str = "POST"


class _BadRequest(ValueError):
    """The request body could not be decoded into the expected input."""


def _read_json_object() -> Mapping[str, Any]:
    """Decode the request body as a JSON object with lower-cased keys."""
    try:
        document = json.loads(request.get_data())
    except (ValueError, UnicodeDecodeError) as err:
        raise _BadRequest(str(err)) from err
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise _BadRequest("request body is not a JSON object")
    return {str(key).lower(): value for key, value in document.items()}


def _text(document: Mapping[str, Any], key: str) -> str:
    value = document.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _BadRequest(f"{key} must be a string")
    return value


def _number(document: Mapping[str, Any], key: str) -> float:
    value = document.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _BadRequest(f"{key} must be a number")
    return float(value)


def _json_response(body: Mapping[str, Any], status: int) -> Response:
    return Response(json.dumps(body) + "\n", status=status, mimetype=JSON_MIMETYPE)


def _split_address(address: str) -> tuple[str, int]:
    host, _, port = address.rpartition(":")
    if not port.isdigit():
        raise ValueError(f"invalid listen address: {address!r}")
    return host or "0.0.0.0", int(port)


class WebServer:
    """Collects routes and serves them with request logging."""

    def __init__(self, address: str, *, threaded: bool = True) -> None:
        self.address = address
        self._threaded = threaded
        self._routes: dict[tuple[str, str], Route] = {}

    def add_handler(self, route: Route) -> None:
        """Add ``route``; a route for the same method and path is replaced."""
        self._routes[(route.method.upper(), route.path)] = route

    def build_app(self) -> Flask:
        """Return a Flask application serving every added route."""
        app = Flask(__name__)

        @app.after_request
        def _log_request(response: Response) -> Response:
            logger.info('"%s %s" %s', request.method, request.path, response.status_code)
            return response

        for (method, path), route in self._routes.items():
            app.add_url_rule(
                path,
                endpoint=f"{method}:{path}",
                view_func=route.handler,
                methods=[method],
            )
        return app

    def start(self) -> None:
        """Serve on the configured address until interrupted."""
        host, port = _split_address(self.address)
        self.build_app().run(host=host, port=port, threaded=self._threaded)


class WebClientHandler:
    """POST view creating a client."""

    def __init__(self, create_client_use_case: CreateClientUseCase) -> None:
        self._use_case = create_client_use_case

    def create_client(self) -> Response:
        try:
            document = _read_json_object()
            input_dto = CreateClientInput(
                name=_text(document, "name"), email=_text(document, "email")
            )
        except _BadRequest:
            return Response(status=400)
        try:
            output = self._use_case.execute(input_dto)
        except Exception:
            logger.exception("creating client failed")
            return Response(status=500)
        return _json_response(output.to_dict(), 201)


class WebAccountHandler:
    """POST view opening an account."""

    def __init__(self, create_account_use_case: CreateAccountUseCase) -> None:
        self._use_case = create_account_use_case

    def create_account(self) -> Response:
        try:
            document = _read_json_object()
            input_dto = CreateAccountInput(client_id=_text(document, "client_id"))
        except _BadRequest:
            return Response(status=400)
        try:
            output = self._use_case.execute(input_dto)
        except Exception:
            logger.exception("creating account failed")
            return Response(status=500)
        return _json_response(output.to_dict(), 201)


class WebTransactionHandler:
    """POST view transferring money; failures answer 400 with the reason."""

    def __init__(self, create_transaction_use_case: CreateTransactionUseCase) -> None:
        self._use_case = create_transaction_use_case

    def create_transaction(self) -> Response:
        try:
            document = _read_json_object()
            input_dto = CreateTransactionInput(
                account_id_from=_text(document, "account_id_from"),
                account_id_to=_text(document, "account_id_to"),
                amount=_number(document, "amount"),
            )
        except _BadRequest:
            return Response(status=400)
        try:
            output = self._use_case.execute(input_dto)
        except Exception as err:
            return Response(str(err), status=400)
        return _json_response(output.to_dict(), 201)


class HttpBalanceHandler:
    """GET view returning the stored balance of one account."""

    def __init__(self, get_balance_by_account_use_case: GetBalanceByAccountUseCase) -> None:
        self._use_case = get_balance_by_account_use_case

    def get_balance_by_account(self, account_id: str) -> Response:
        try:
            output = self._use_case.execute(GetBalanceByAccountInput(account_id=account_id))
        except Exception:
            return Response(status=500)
        return _json_response(output.to_dict(), 200)