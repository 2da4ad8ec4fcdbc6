import logging

from django.db import DatabaseError, connections
from django.http import JsonResponse

logger = logging.getLogger(__name__)


def healthz(request):
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError:
        logger.exception("health check: database unavailable")
        return JsonResponse({'status': 'unavailable', 'db': False}, status=503)
    return JsonResponse({'status': 'ok', 'db': bool(row and row[0] == 1)})
