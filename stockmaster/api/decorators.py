"""
View decorator for the JSON API.

    @api_view(['GET', 'POST'])
    def products(request): ...

Handles method filtering, CSRF exemption, JSON body parsing (into
request.json), bearer token authentication and the translation of
StockError/AuthError into JSON error responses.
"""

import json
import logging
from functools import wraps

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from stockmaster.exceptions import BaseError, StockError
from stockmaster.services.auth import Accounts

logger = logging.getLogger('stockmaster')

STATUS_BY_CODE = {
    'NOT_FOUND': 404,
    'INSUFFICIENT_QUANTITY': 409,
    'DUPLICATE_NUMBER': 409,
    'IN_USE': 409,
    'ALREADY_ACKNOWLEDGED': 409,
    'INVALID_CREDENTIALS': 401,
    'INVALID_TOKEN': 401,
    'ACCOUNT_INACTIVE': 403,
}


def error_response(err: BaseError) -> JsonResponse:
    return JsonResponse({'error': err.as_dict()}, status=STATUS_BY_CODE.get(err.code, 400))


def _parse_body(request) -> dict:
    if request.method == 'GET' or not request.body:
        return {}
    if request.content_type != 'application/json':
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise StockError('VALIDATION_ERROR', 'Request body is not valid JSON') from None
    if not isinstance(data, dict):
        raise StockError('VALIDATION_ERROR', 'Request body must be a JSON object')
    return data


def bearer_token(request) -> str:
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer':
        return ''
    return token.strip()


def api_view(methods, auth: bool = True):
    """
    Args:
        methods: Allowed HTTP methods
        auth: Require a valid bearer token (sets request.user)
    """
    def decorator(view):
        @csrf_exempt
        @require_http_methods(methods)
        @wraps(view)
        def wrapper(request, *args, **kwargs):
            try:
                request.json = _parse_body(request)
                if auth:
                    request.user = Accounts.user_for_token(bearer_token(request))
                return view(request, *args, **kwargs)
            except BaseError as err:
                logger.info(
                    "api.error",
                    extra={
                        "path": request.path,
                        "method": request.method,
                        "code": err.code,
                    },
                )
                return error_response(err)
        return wrapper
    return decorator
