from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django.db import IntegrityError, transaction
from django.shortcuts import get_object_or_404
import logging

from backend.core.cache_utils import get_cached_list, cache_list, PRODUCTS_LIST, PUMP_TYPES_LIST
from backend.core.utils import (
    error_response, validation_error_response, find_name_conflict, generate_slug,
    move_item, parse_id, set_primary_image,
)
from .filters import ProductFilter
from .models import Brand, PumpType, Product
from .serializers import BrandSerializer, PumpTypeSerializer, ProductSerializer, ProductListSerializer
from .usage import sync_all_usage

logger = logging.getLogger(__name__)


def _product_queryset():
    return Product.objects.select_related('brand', 'product_line', 'pump_type', 'sub_pump_type')


def _request_slug(data, source_field):
    """Slug the request will end up with: the given one, or one built from the name"""
    slug = str(data.get('slug') or '').strip().lower()
    return slug or generate_slug(data.get(source_field, ''))


def _save_with_children(serializer, label):
    """Save a serializer and its nested rows in one transaction; constraint clashes become a 400"""
    try:
        with transaction.atomic():
            return serializer.save(), None
    except IntegrityError as e:
        logger.error(f"IntegrityError saving {label.lower()}: {e}", exc_info=True)
        return None, error_response(f'{label} could not be saved', details=str(e))


def _move_children(children, data):
    """Move one child from ``data['from']`` to ``data['to']`` and renumber display_order"""
    from_index = parse_id(data.get('from'))
    to_index = parse_id(data.get('to'))
    if from_index is None or to_index is None:
        return error_response('Both "from" and "to" positions are required')
    try:
        ordered = move_item(list(children.order_by('display_order', 'id')), from_index, to_index)
    except IndexError as e:
        return error_response(str(e))
    with transaction.atomic():
        for position, child in enumerate(ordered):
            if child.display_order != position:
                child.display_order = position
                child.save(update_fields=['display_order'])
    return None


def _conflict_response(model, label, name_field, data, exclude_pk=None):
    """409 when another row already uses the name (case-insensitive) or the slug"""
    if find_name_conflict(model, name_field, str(data.get(name_field) or ''), exclude_pk=exclude_pk):
        return error_response(f'{label} with this name already exists', status.HTTP_409_CONFLICT)
    slug = _request_slug(data, name_field)
    if slug:
        queryset = model.objects.filter(slug=slug)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)
        if queryset.exists():
            return error_response(f'{label} with this slug already exists', status.HTTP_409_CONFLICT)
    return None


# Brand admin views
@api_view(['GET', 'POST', 'PUT', 'DELETE'])
def admin_brands(request):
    """
    Brand administration.

    GET lists brands with their usage maps, POST creates one, PUT and
    DELETE act on the brand named by ``?id=``.
    """
    if request.method == 'GET':
        brands = Brand.objects.prefetch_related('product_lines').order_by('name')
        return Response(BrandSerializer(brands, many=True).data)

    if request.method == 'POST':
        data = request.data.copy()
        lines_data = data.pop('product_lines', [])
        if not str(data.get('name') or '').strip():
            return error_response('Brand name is required')
        conflict = _conflict_response(Brand, 'Brand', 'name', data)
        if conflict:
            return conflict
        serializer = BrandSerializer(data=data, context={'product_lines_data': lines_data})
        if serializer.is_valid():
            brand, failure = _save_with_children(serializer, 'Brand')
            if failure:
                return failure
            logger.info(f"Created brand {brand.name} ({brand.pk})")
            return Response(BrandSerializer(brand).data, status=status.HTTP_201_CREATED)
        return validation_error_response(serializer.errors)

    brand_id = request.query_params.get('id')
    if not brand_id:
        return error_response('Brand ID is required')
    if parse_id(brand_id) is None:
        return error_response('Invalid brand ID')
    brand = get_object_or_404(Brand, pk=brand_id)

    if request.method == 'PUT':
        data = request.data.copy()
        lines_data = data.pop('product_lines', None)
        conflict = _conflict_response(Brand, 'Brand', 'name', data, exclude_pk=brand.pk)
        if conflict:
            return conflict
        serializer = BrandSerializer(brand, data=data, context={'product_lines_data': lines_data})
        if serializer.is_valid():
            brand, failure = _save_with_children(serializer, 'Brand')
            if failure:
                return failure
            return Response(BrandSerializer(brand).data)
        return validation_error_response(serializer.errors)

    # DELETE
    product_names = list(brand.products.order_by('name').values_list('name', flat=True))
    if product_names:
        return error_response(
            f'Cannot delete brand. It is used by {len(product_names)} product(s): {", ".join(product_names)}',
            status.HTTP_409_CONFLICT,
        )
    deleted = BrandSerializer(brand).data
    brand.delete()
    logger.info(f"Deleted brand {deleted['name']} ({brand_id})")
    return Response({'message': 'Brand deleted successfully', 'deleted_brand': deleted})


# Pump type admin views
@api_view(['GET', 'POST', 'PUT', 'DELETE'])
def admin_pump_types(request):
    """Pump type administration, same shape as brands with ``?id=`` for PUT/DELETE"""
    if request.method == 'GET':
        pump_types = PumpType.objects.prefetch_related('sub_pump_types').order_by('pump_type')
        return Response(PumpTypeSerializer(pump_types, many=True).data)

    if request.method == 'POST':
        data = request.data.copy()
        subs_data = data.pop('sub_pump_types', [])
        if not str(data.get('pump_type') or '').strip():
            return error_response('Pump type name is required')
        conflict = _conflict_response(PumpType, 'Pump type', 'pump_type', data)
        if conflict:
            return conflict
        serializer = PumpTypeSerializer(data=data, context={'sub_pump_types_data': subs_data})
        if serializer.is_valid():
            pump_type, failure = _save_with_children(serializer, 'Pump type')
            if failure:
                return failure
            logger.info(f"Created pump type {pump_type.pump_type} ({pump_type.pk})")
            return Response(PumpTypeSerializer(pump_type).data, status=status.HTTP_201_CREATED)
        return validation_error_response(serializer.errors)

    pump_type_id = request.query_params.get('id')
    if not pump_type_id:
        return error_response('Pump type ID is required')
    if parse_id(pump_type_id) is None:
        return error_response('Invalid pump type ID')
    pump_type = get_object_or_404(PumpType, pk=pump_type_id)

    if request.method == 'PUT':
        data = request.data.copy()
        subs_data = data.pop('sub_pump_types', None)
        conflict = _conflict_response(PumpType, 'Pump type', 'pump_type', data, exclude_pk=pump_type.pk)
        if conflict:
            return conflict
        serializer = PumpTypeSerializer(pump_type, data=data, context={'sub_pump_types_data': subs_data})
        if serializer.is_valid():
            pump_type, failure = _save_with_children(serializer, 'Pump type')
            if failure:
                return failure
            return Response(PumpTypeSerializer(pump_type).data)
        return validation_error_response(serializer.errors)

    # DELETE
    product_names = list(pump_type.products.order_by('name').values_list('name', flat=True))
    if product_names:
        return error_response(
            f'Cannot delete pump type. It is used by {len(product_names)} product(s): {", ".join(product_names)}',
            status.HTTP_409_CONFLICT,
        )
    deleted = PumpTypeSerializer(pump_type).data
    pump_type.delete()
    logger.info(f"Deleted pump type {deleted['pump_type']} ({pump_type_id})")
    return Response({'message': 'Pump type deleted successfully', 'deleted_pump_type': deleted})


@api_view(['POST'])
def admin_sync_usage(request):
    """Rebuild every brand and pump type usage map"""
    result = sync_all_usage()
    if result['success']:
        return Response(result)
    return Response(
        {'error': result['message'], 'success': False},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


# Product admin views
@api_view(['GET', 'POST'])
def admin_product_list_create(request):
    """List all products by name or create a new product"""
    if request.method == 'GET':
        filterset = ProductFilter(request.query_params, queryset=_product_queryset().order_by('name'))
        serializer = ProductSerializer(filterset.qs, many=True)
        return Response(serializer.data)

    data = request.data
    missing = [field for field in ('name', 'description', 'category') if not str(data.get(field) or '').strip()]
    if missing:
        return error_response(f'Missing required fields: {", ".join(missing)}')
    serializer = ProductSerializer(data=data)
    if serializer.is_valid():
        product = serializer.save()
        logger.info(f"Created product {product.name} ({product.pk})")
        return Response(ProductSerializer(product).data, status=status.HTTP_201_CREATED)
    return validation_error_response(serializer.errors)


@api_view(['GET', 'PUT', 'DELETE'])
def admin_product_detail(request, pk):
    """Retrieve, update or delete a product"""
    product = get_object_or_404(_product_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(ProductSerializer(product).data)
    elif request.method == 'PUT':
        serializer = ProductSerializer(product, data=request.data)
        if serializer.is_valid():
            product = serializer.save()
            return Response(ProductSerializer(product).data)
        return validation_error_response(serializer.errors)
    else:  # DELETE
        product_name = product.name
        product.delete()
        logger.info(f"Deleted product {product_name} ({pk})")
        return Response({'message': 'Product deleted successfully'})


@api_view(['POST'])
def admin_product_primary_image(request, pk):
    """
    Toggle the primary flag of one product image, ``{"index": n}``.

    Every other image loses the flag; toggling the current primary image
    leaves the product without one.
    """
    product = get_object_or_404(_product_queryset(), pk=pk)
    index = parse_id(request.data.get('index'))
    if index is None:
        return error_response('Image index is required')
    try:
        product.images = set_primary_image(product.images or [], index)
    except IndexError as e:
        return error_response(str(e))
    product.save(update_fields=['images', 'updated_at'])
    return Response(ProductSerializer(product).data)


@api_view(['POST'])
def admin_move_product_line(request, pk):
    """Move a product line within its brand, ``{"from": i, "to": j}``"""
    brand = get_object_or_404(Brand, pk=pk)
    failure = _move_children(brand.product_lines.all(), request.data)
    if failure:
        return failure
    brand = Brand.objects.prefetch_related('product_lines').get(pk=brand.pk)
    return Response(BrandSerializer(brand).data)


@api_view(['POST'])
def admin_move_sub_pump_type(request, pk):
    """Move a sub pump type within its pump type, ``{"from": i, "to": j}``"""
    pump_type = get_object_or_404(PumpType, pk=pk)
    failure = _move_children(pump_type.sub_pump_types.all(), request.data)
    if failure:
        return failure
    pump_type = PumpType.objects.prefetch_related('sub_pump_types').get(pk=pump_type.pk)
    return Response(PumpTypeSerializer(pump_type).data)


# Public views
@api_view(['GET'])
def product_list(request):
    """Public product listing, optionally filtered by ``?category=``"""
    params = request.query_params.dict()
    cached_data, cache_key = get_cached_list(PRODUCTS_LIST, params)
    if cached_data is not None:
        return Response(cached_data)

    filterset = ProductFilter(request.query_params, queryset=_product_queryset().order_by('name'))
    if not filterset.is_valid():
        return validation_error_response(filterset.errors)
    data = {'products': ProductListSerializer(filterset.qs, many=True).data}
    cache_list(cache_key, data)
    return Response(data)


@api_view(['GET'])
def product_by_slug(request, slug):
    product = get_object_or_404(_product_queryset(), slug=slug)
    return Response(ProductSerializer(product).data)


@api_view(['GET'])
def brand_by_slug(request, slug):
    """Brand with product lines and usage maps"""
    brand = get_object_or_404(Brand.objects.prefetch_related('product_lines'), slug=slug)
    return Response(BrandSerializer(brand).data)


@api_view(['GET'])
def pump_type_list(request):
    cached_data, cache_key = get_cached_list(PUMP_TYPES_LIST, {})
    if cached_data is not None:
        return Response(cached_data)

    pump_types = PumpType.objects.prefetch_related('sub_pump_types').order_by('pump_type')
    data = {'pump_types': PumpTypeSerializer(pump_types, many=True).data}
    cache_list(cache_key, data)
    return Response(data)
