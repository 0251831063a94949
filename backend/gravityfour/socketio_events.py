from flask import current_app, request
from gravityfour import events, socketio
from gravityfour.services.games.service import GameService
from typing import Any, Dict


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _service() -> GameService:
    return current_app.extensions['gravityfour']


def _payload(data) -> Dict[str, Any]:
    return data if isinstance(data, dict) else {}


def handle_connect(auth=None):
    _service().connect(_get_sid())


def handle_disconnect(reason=None):
    _service().disconnect(_get_sid())


def handle_place_piece(data):
    data = _payload(data)
    _service().place_piece(_get_sid(), data.get('roomId'), data.get('col'))


def handle_remove_piece(data):
    data = _payload(data)
    _service().remove_piece(_get_sid(), data.get('roomId'), data.get('row'), data.get('col'))


def handle_request_rematch(data=None):
    data = _payload(data)
    _service().request_rematch(_get_sid(), data.get('roomId'))


def make_sender(namespace: str):
    """Deliver one outbound event to a single participant sid."""
    def send(event: str, payload: Any, to: str) -> None:
        socketio.emit(event, payload, to=to, namespace=namespace)
    return send


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on ``namespace``.

    Outbound messages are addressed to participant sids in the same
    namespace, so handlers are bound to exactly one.
    """
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event(events.PLACE_PIECE, handle_place_piece, namespace=namespace)
    socketio.on_event(events.REMOVE_PIECE, handle_remove_piece, namespace=namespace)
    socketio.on_event(events.REQUEST_REMATCH, handle_request_rematch, namespace=namespace)
