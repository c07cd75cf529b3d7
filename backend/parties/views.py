from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django.db.models import Count
from django.shortcuts import get_object_or_404
import logging
import math

from backend.core.cache_utils import (
    get_cached_list, cache_list, CUSTOMERS_LIST, INDUSTRIES_LIST, BUSINESS_TYPES_LIST,
)
from backend.core.utils import (
    error_response, validation_error_response, find_name_conflict, generate_slug,
    parse_id, query_flag, query_int,
)
from .filters import CustomerFilter, IndustryFilter
from .models import Industry, BusinessType, Customer, Inquiry
from .serializers import (
    IndustrySerializer, IndustrySummarySerializer, BusinessTypeSerializer,
    CustomerSerializer, InquirySerializer,
)

logger = logging.getLogger(__name__)


def _customer_queryset():
    return Customer.objects.select_related('business_type').prefetch_related('industries')


def _industry_payload(industries, include_customers=False, include_applications=False):
    """Serialize industries, optionally embedding their customers and applications"""
    data = []
    for industry in industries:
        item = IndustrySerializer(industry).data
        if include_customers:
            item['customers'] = [
                {
                    'id': customer.id,
                    'name': customer.name,
                    'slug': customer.slug,
                    'business_type': customer.business_type_id,
                    'province': customer.province,
                }
                for customer in industry.customers.all()
            ]
        if include_applications:
            item['applications'] = [
                {'id': app.id, 'name': app.name, 'slug': app.slug, 'category': app.category}
                for app in industry.applications.all()
            ]
        data.append(item)
    return data


def _industry_conflict(data, exclude_pk=None):
    """409 when another industry already uses the name or the slug"""
    name = str(data.get('name') or '')
    slug = str(data.get('slug') or '').strip().lower() or generate_slug(name)
    queryset = Industry.objects.all()
    if exclude_pk is not None:
        queryset = queryset.exclude(pk=exclude_pk)
    if (name and queryset.filter(name__iexact=name.strip()).exists()) or (slug and queryset.filter(slug=slug).exists()):
        return error_response('Industry name or slug already exists', status.HTTP_409_CONFLICT)
    return None


# Industry views
@api_view(['GET', 'POST'])
def industry_list_create(request):
    """
    List industries or create a new one.

    GET accepts ``category``, ``includeCustomers``, ``includeApplications``
    and ``updateStats`` (recount customers/applications before returning).
    """
    if request.method == 'GET':
        include_customers = query_flag(request, 'includeCustomers')
        include_applications = query_flag(request, 'includeApplications')
        update_stats = query_flag(request, 'updateStats')

        cached_data, cache_key = get_cached_list(INDUSTRIES_LIST, request.query_params.dict())
        if cached_data is not None and not update_stats:
            return Response(cached_data)

        filterset = IndustryFilter(request.query_params, queryset=Industry.objects.order_by('display_order', 'name'))
        industries = filterset.qs

        if update_stats:
            for industry in industries:
                try:
                    industry.update_customer_count()
                    industry.update_application_count()
                except Exception as e:
                    logger.error(f"Error updating stats for industry {industry.name}: {str(e)}", exc_info=True)
            # Refetch with updated stats
            industries = filterset.qs.all()

        if include_customers:
            industries = industries.prefetch_related('customers')
        if include_applications:
            industries = industries.prefetch_related('applications')

        data = _industry_payload(industries, include_customers, include_applications)
        cache_list(cache_key, data)
        return Response(data)

    data = request.data
    if not str(data.get('name') or '').strip():
        return error_response('Industry name is required')
    conflict = _industry_conflict(data)
    if conflict:
        return conflict
    serializer = IndustrySerializer(data=data)
    if serializer.is_valid():
        industry = serializer.save()
        logger.info(f"Created industry {industry.name} ({industry.pk})")
        return Response(IndustrySerializer(industry).data, status=status.HTTP_201_CREATED)
    return validation_error_response(serializer.errors)


@api_view(['GET', 'PUT', 'DELETE'])
def industry_detail(request, pk):
    """Retrieve, update or delete an industry"""
    industry = get_object_or_404(Industry, pk=pk)

    if request.method == 'GET':
        if query_flag(request, 'updateStats'):
            industry.update_customer_count()
        include_customers = query_flag(request, 'includeCustomers')
        return Response(_industry_payload([industry], include_customers=include_customers)[0])

    elif request.method == 'PUT':
        conflict = _industry_conflict(request.data, exclude_pk=industry.pk)
        if conflict:
            return conflict
        serializer = IndustrySerializer(industry, data=request.data)
        if serializer.is_valid():
            industry = serializer.save()
            return Response(IndustrySerializer(industry).data)
        return validation_error_response(serializer.errors)

    else:  # DELETE
        customer_count = industry.get_customer_count()
        if customer_count:
            return Response(
                {
                    'error': 'Cannot delete industry',
                    'message': (
                        f'This industry is currently assigned to {customer_count} customer(s). '
                        f'Please reassign or remove these customers first.'
                    ),
                },
                status=status.HTTP_400_BAD_REQUEST,
            )
        industry_name = industry.name
        industry.delete()
        logger.info(f"Deleted industry {industry_name} ({pk})")
        return Response({'message': 'Industry deleted successfully'})


@api_view(['GET'])
def industry_customers(request, pk):
    """Customers of one industry with ``businessType``, ``limit`` and ``page``"""
    industry = get_object_or_404(Industry, pk=pk)

    customers = _customer_queryset().filter(industries=industry).order_by('name')
    business_type = request.query_params.get('businessType')
    if business_type:
        if parse_id(business_type) is None:
            return error_response('Invalid business type ID')
        customers = customers.filter(business_type_id=business_type)

    total = customers.count()
    limit = query_int(request, 'limit', 0, minimum=0)
    page = query_int(request, 'page', 1)
    if limit > 0:
        offset = (page - 1) * limit
        customers = customers[offset:offset + limit]

    return Response({
        'customers': CustomerSerializer(customers, many=True).data,
        'industry': {
            'id': industry.id,
            'name': industry.name,
            'slug': industry.slug,
            'category': industry.category,
        },
        'pagination': {
            'total': total,
            'page': page,
            'limit': limit or total,
            'pages': math.ceil(total / limit) if limit > 0 else 1,
        },
    })


@api_view(['GET'])
def admin_industry_options(request):
    """Id/name/slug of every industry for form pickers"""
    industries = Industry.objects.order_by('display_order', 'name')
    return Response({'industries': IndustrySummarySerializer(industries, many=True).data})


# Business type views
@api_view(['GET', 'POST', 'PUT', 'DELETE'])
def admin_business_types(request):
    """
    Business type administration.

    GET lists types with customer counts, POST creates one, PUT and DELETE
    act on the type named by ``?id=``. A type still assigned to customers
    cannot be deleted.
    """
    if request.method == 'GET':
        business_types = BusinessType.objects.annotate(annotated_customer_count=Count('customers')).order_by('name')
        return Response(BusinessTypeSerializer(business_types, many=True).data)

    if request.method == 'POST':
        name = str(request.data.get('name') or '').strip()
        if not name:
            return error_response('Business type name is required')
        if find_name_conflict(BusinessType, 'name', name):
            return error_response('Business type with this name already exists', status.HTTP_409_CONFLICT)
        serializer = BusinessTypeSerializer(data={'name': name})
        if serializer.is_valid():
            business_type = serializer.save()
            logger.info(f"Created business type {business_type.name} ({business_type.pk})")
            return Response(serializer.data, status=status.HTTP_201_CREATED)
        return validation_error_response(serializer.errors)

    business_type_id = request.query_params.get('id')
    if not business_type_id:
        return error_response('Business type ID is required')
    if parse_id(business_type_id) is None:
        return error_response('Invalid business type ID')
    business_type = get_object_or_404(BusinessType, pk=business_type_id)

    if request.method == 'PUT':
        name = str(request.data.get('name') or '').strip()
        if not name:
            return error_response('Business type name is required')
        if find_name_conflict(BusinessType, 'name', name, exclude_pk=business_type.pk):
            return error_response('Business type with this name already exists', status.HTTP_409_CONFLICT)
        serializer = BusinessTypeSerializer(business_type, data={'name': name})
        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)
        return validation_error_response(serializer.errors)

    # DELETE
    customer_names = list(business_type.get_customers().values_list('name', flat=True))
    if customer_names:
        return error_response(
            f'Cannot delete business type. It is currently assigned to {len(customer_names)} '
            f'customer(s): {", ".join(customer_names)}'
        )
    deleted = BusinessTypeSerializer(business_type).data
    business_type.delete()
    logger.info(f"Deleted business type {deleted['name']} ({business_type_id})")
    return Response({'message': 'Business type deleted successfully', 'deleted_business_type': deleted})


@api_view(['GET'])
def business_type_list(request):
    cached_data, cache_key = get_cached_list(BUSINESS_TYPES_LIST, {})
    if cached_data is not None:
        return Response(cached_data)
    business_types = BusinessType.objects.annotate(annotated_customer_count=Count('customers')).order_by('name')
    data = BusinessTypeSerializer(business_types, many=True).data
    cache_list(cache_key, data)
    return Response(data)


# Customer views
def _check_customer_references(data):
    """Return an error response when the business type or an industry id does not exist"""
    try:
        business_type_exists = BusinessType.objects.filter(pk=data.get('business_type')).exists()
    except (TypeError, ValueError):
        business_type_exists = False
    if not business_type_exists:
        return error_response('Invalid business type ID')
    industry_ids = data.get('industry') or []
    if not isinstance(industry_ids, list):
        industry_ids = [industry_ids]
    industry_ids = {str(pk) for pk in industry_ids if str(pk).strip()}
    if industry_ids:
        try:
            found = Industry.objects.filter(pk__in=industry_ids).count()
        except (TypeError, ValueError):
            found = -1
        if found != len(industry_ids):
            return error_response('One or more invalid industry IDs')
    return None


def _check_customer_payload(data, exclude_pk=None):
    missing = [field for field in ('name', 'business_type') if not str(data.get(field) or '').strip()]
    if missing:
        return error_response('Missing required fields: name, slug, and business_type are required')
    slug = str(data.get('slug') or '').strip().lower() or generate_slug(data.get('name'))
    duplicates = Customer.objects.filter(slug=slug)
    if exclude_pk is not None:
        duplicates = duplicates.exclude(pk=exclude_pk)
    if duplicates.exists():
        return error_response('Customer slug already exists')
    return _check_customer_references(data)


@api_view(['GET', 'POST'])
def admin_customer_list_create(request):
    """List all customers (newest first) or create a new customer"""
    if request.method == 'GET':
        filterset = CustomerFilter(request.query_params, queryset=_customer_queryset().order_by('-created_at'))
        return Response(CustomerSerializer(filterset.qs, many=True).data)

    invalid = _check_customer_payload(request.data)
    if invalid:
        return invalid
    serializer = CustomerSerializer(data=request.data)
    if serializer.is_valid():
        customer = serializer.save()
        logger.info(f"Created customer {customer.name} ({customer.pk})")
        return Response(CustomerSerializer(customer).data, status=status.HTTP_201_CREATED)
    return validation_error_response(serializer.errors)


@api_view(['GET', 'PUT', 'DELETE'])
def admin_customer_detail(request, pk):
    """Retrieve, update or delete a customer"""
    customer = get_object_or_404(_customer_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(CustomerSerializer(customer).data)
    elif request.method == 'PUT':
        invalid = _check_customer_payload(request.data, exclude_pk=customer.pk)
        if invalid:
            return invalid
        serializer = CustomerSerializer(customer, data=request.data)
        if serializer.is_valid():
            customer = serializer.save()
            return Response(CustomerSerializer(customer).data)
        return validation_error_response(serializer.errors)
    else:  # DELETE
        deleted = CustomerSerializer(customer).data
        customer.delete()
        logger.info(f"Deleted customer {deleted['name']} ({pk})")
        return Response({'message': 'Customer deleted successfully', 'deleted_customer': deleted})


@api_view(['GET'])
def customer_list(request):
    """Public customers: featured first, then by nationality and newest"""
    params = request.query_params.dict()
    cached_data, cache_key = get_cached_list(CUSTOMERS_LIST, params)
    if cached_data is not None:
        return Response(cached_data)

    queryset = _customer_queryset().order_by('-featured', '-nationality', '-created_at')
    filterset = CustomerFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return validation_error_response(filterset.errors)
    data = CustomerSerializer(filterset.qs, many=True).data
    cache_list(cache_key, data)
    return Response(data)


@api_view(['GET'])
def customer_by_slug(request, slug):
    customer = get_object_or_404(_customer_queryset(), slug=slug)
    return Response(CustomerSerializer(customer).data)


# Contact views
@api_view(['GET', 'POST'])
def contact(request):
    """Store a contact form submission, or list submissions newest first"""
    if request.method == 'GET':
        inquiries = Inquiry.objects.order_by('-created_at')
        return Response({'contacts': InquirySerializer(inquiries, many=True).data})

    missing = [field for field in ('name', 'email', 'message') if not str(request.data.get(field) or '').strip()]
    if missing:
        return error_response('Name, email, and message are required')
    serializer = InquirySerializer(data=request.data)
    if serializer.is_valid():
        inquiry = serializer.save()
        logger.info(f"Received {inquiry.inquiry_type} inquiry from {inquiry.email}")
        return Response(
            {'message': 'Contact form submitted successfully', 'contact': serializer.data},
            status=status.HTTP_201_CREATED,
        )
    return validation_error_response(serializer.errors)
