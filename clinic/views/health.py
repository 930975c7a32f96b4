import logging

from django.db import DatabaseError, connections
from django.utils import timezone
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def welcome(request):
    return Response({'message': 'Welcome to MediConnect API'})


@api_view(['GET'])
@authentication_classes([])
@permission_classes([AllowAny])
def health(request):
    now = timezone.now().isoformat()
    try:
        with connections['default'].cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        logger.error("Health check failed: %s", e)
        return Response({'status': 'error', 'timestamp': now, 'db': False, 'message': str(e)}, status=500)
    return Response({'status': 'ok', 'timestamp': now, 'db': bool(row and row[0] == 1)})
