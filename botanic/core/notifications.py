"""
Notification envelopes for mutation responses.

Admin screens show a toast after every create/update/delete. The API carries
what the toast needs: a title (`message`) and an optional `description` on
success, or an `error` title plus the failure `message` otherwise.
"""
import logging

from rest_framework import status
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def success_response(title, description=None, data=None, status_code=status.HTTP_200_OK):
    """Response for a successful mutation"""
    payload = {'message': title}
    if description:
        payload['description'] = description
    if data is not None:
        payload['data'] = data
    return Response(payload, status=status_code)


def first_error_message(errors):
    """Flatten DRF serializer errors into a single human-readable line"""
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = first_error_message(value)
            if message:
                return message if field == 'non_field_errors' else f"{field}: {message}"
        return ''
    if isinstance(errors, (list, tuple)):
        for value in errors:
            message = first_error_message(value)
            if message:
                return message
        return ''
    return str(errors)


def validation_error_response(title, errors):
    """400 response carrying the serializer errors"""
    return Response({
        'error': title,
        'message': first_error_message(errors),
        'errors': errors,
    }, status=status.HTTP_400_BAD_REQUEST)


def error_response(title, error, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR):
    """Response for a failed mutation; 5xx failures are logged with their traceback"""
    message = str(error)
    if status_code >= 500:
        logger.error(f"{title}: {message}", exc_info=isinstance(error, Exception))
    return Response({'error': title, 'message': message}, status=status_code)
