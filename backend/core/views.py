from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django.db import connection, DatabaseError
from django.utils import timezone
import logging

logger = logging.getLogger(__name__)


@api_view(['GET'])
def health_check(request):
    """Report database connectivity and row counts of the main collections"""
    from backend.catalog.models import Product
    from backend.parties.models import Customer, Industry

    try:
        with connection.cursor() as cursor:
            cursor.execute('SELECT 1')
        counts = {
            'products': Product.objects.count(),
            'industries': Industry.objects.count(),
            'customers': Customer.objects.count(),
        }
    except DatabaseError as e:
        logger.error(f"Database health check failed: {str(e)}", exc_info=True)
        return Response(
            {'status': 'error', 'database': 'unavailable', 'error': str(e)},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return Response({
        'status': 'ok',
        'database': 'connected',
        'collections': counts,
        'timestamp': timezone.now().isoformat(),
    })
