from typing import Any, Dict, List

from flask import Blueprint, abort, jsonify, redirect, request, url_for
from flask_jwt_extended import (
    create_access_token,
    get_jwt_identity,
    set_access_cookies,
    unset_jwt_cookies,
    verify_jwt_in_request,
)
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from ors.controllers import InboundRequest, get_controller
from ors.models.enumerations import Operation
from ors.utils.data_utility import get_long
from ors.utils.logging_utils import get_logger, log_context

ctl_bp = Blueprint('ctl_bp', __name__)


def _request_fields() -> Dict[str, Any]:
    fields: Dict[str, Any] = dict(request.args.items())
    if request.is_json:
        payload = request.get_json(silent=True) or {}
        if isinstance(payload, dict):
            fields.update(payload)
    else:
        fields.update(request.form.items())
    return fields


def _request_ids(fields: Dict[str, Any]) -> List[int]:
    if request.is_json:
        raw = fields.get('ids') or []
        if not isinstance(raw, (list, tuple)):
            raw = [raw]
    else:
        raw = request.form.getlist('ids') or request.args.getlist('ids')
    return [pk for pk in (get_long(value) for value in raw) if pk > 0]


def _current_identity():
    """
    Login id carried by a valid access token and whether the presented token
    was unusable. An expired or malformed token makes the request anonymous.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as exc:
        get_logger('auth').info("Treating request as anonymous: %s", exc)
        return None, True
    identity = get_jwt_identity()
    return (str(identity) if identity is not None else None), False


def _dump(schema_cls, value, many=False):
    if schema_cls is None or value is None:
        return value if not many else list(value or [])
    return schema_cls(many=many).dump(value)


def _envelope(controller, outcome) -> Dict[str, Any]:
    message = None
    if outcome.message:
        message = {'type': outcome.message_type.value, 'text': outcome.message}
    return {
        'view': outcome.view,
        'record': _dump(controller.record_schema, outcome.record),
        'items': _dump(controller.record_schema, outcome.items, many=True),
        'errors': outcome.errors,
        'message': message,
        'page_no': outcome.page_no,
        'page_size': outcome.page_size,
        'next_list_size': outcome.next_list_size,
        'preload': outcome.preload,
    }


@ctl_bp.route('/<screen>', methods=['GET', 'POST'])
def dispatch_screen(screen):
    controller = get_controller(screen)
    if controller is None:
        abort(404)

    logger = get_logger('route')
    fields = _request_fields()
    raw_operation = fields.pop('operation', None)
    identity, stale_token = _current_identity()
    inbound = InboundRequest(
        method=request.method,
        operation=Operation.parse(raw_operation),
        fields=fields,
        ids=_request_ids(fields),
        identity=identity,
    )
    fields.pop('ids', None)

    with log_context(route=screen, method=request.method):
        logger.info("%s /ctl/%s operation=%s", request.method, screen, raw_operation)
        outcome = controller.dispatch(inbound)

        if outcome.redirect:
            response = redirect(url_for('ctl_bp.dispatch_screen', screen=outcome.redirect), code=302)
        else:
            response = jsonify(_envelope(controller, outcome))

        if outcome.session_identity:
            set_access_cookies(response, create_access_token(identity=outcome.session_identity))
            logger.info("Issued access token for %s", outcome.session_identity)
        if outcome.end_session or (stale_token and not outcome.session_identity):
            unset_jwt_cookies(response)
        return response
