from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response
from django.shortcuts import get_object_or_404
from django.utils import timezone
import logging

from backend.core.cache_utils import get_cached_list, cache_list, PROJECTS_LIST, APPLICATIONS_LIST
from backend.core.utils import error_response, validation_error_response
from .filters import ProjectFilter, ApplicationFilter
from .models import Project, Application
from .serializers import ProjectSerializer, ApplicationSerializer

logger = logging.getLogger(__name__)

PROJECT_REQUIRED_FIELDS = (
    'title', 'description', 'client', 'industry', 'location', 'completion_date',
    'project_type', 'challenges', 'solutions', 'results',
)
APPLICATION_REQUIRED_FIELDS = ('name', 'description', 'category')


def _missing_fields(data, fields):
    return [field for field in fields if not str(data.get(field) or '').strip()]


def _application_queryset():
    return Application.objects.prefetch_related('recommended_industries')


# Project admin views
@api_view(['GET', 'POST'])
def admin_project_list_create(request):
    """List all projects (newest first) or create a new project"""
    if request.method == 'GET':
        filterset = ProjectFilter(request.query_params, queryset=Project.objects.order_by('-created_at'))
        return Response(ProjectSerializer(filterset.qs, many=True).data)

    missing = _missing_fields(request.data, PROJECT_REQUIRED_FIELDS)
    if missing:
        return error_response(f'Missing required fields: {", ".join(missing)}')
    serializer = ProjectSerializer(data=request.data)
    if serializer.is_valid():
        project = serializer.save()
        logger.info(f"Created project {project.title} ({project.pk})")
        return Response(ProjectSerializer(project).data, status=status.HTTP_201_CREATED)
    return validation_error_response(serializer.errors)


@api_view(['GET', 'PUT', 'DELETE'])
def admin_project_detail(request, pk):
    """Retrieve, update or delete a project"""
    project = get_object_or_404(Project, pk=pk)

    if request.method == 'GET':
        return Response(ProjectSerializer(project).data)
    elif request.method == 'PUT':
        serializer = ProjectSerializer(project, data=request.data)
        if serializer.is_valid():
            project = serializer.save()
            return Response(ProjectSerializer(project).data)
        return validation_error_response(serializer.errors)
    else:  # DELETE
        deleted = ProjectSerializer(project).data
        project.delete()
        logger.info(f"Deleted project {deleted['title']} ({pk})")
        return Response({'message': 'Project deleted successfully', 'deleted_project': deleted})


# Application admin views
@api_view(['GET', 'POST'])
def admin_application_list_create(request):
    """List every application, active or not, or create one"""
    if request.method == 'GET':
        filterset = ApplicationFilter(request.query_params, queryset=_application_queryset())
        return Response(ApplicationSerializer(filterset.qs, many=True).data)

    missing = _missing_fields(request.data, APPLICATION_REQUIRED_FIELDS)
    if missing:
        return error_response(f'Missing required fields: {", ".join(missing)}')
    serializer = ApplicationSerializer(data=request.data)
    if serializer.is_valid():
        application = serializer.save()
        logger.info(f"Created application {application.name} ({application.pk})")
        return Response(ApplicationSerializer(application).data, status=status.HTTP_201_CREATED)
    return validation_error_response(serializer.errors)


@api_view(['GET', 'PUT', 'DELETE'])
def admin_application_detail(request, pk):
    application = get_object_or_404(_application_queryset(), pk=pk)

    if request.method == 'GET':
        return Response(ApplicationSerializer(application).data)
    elif request.method == 'PUT':
        serializer = ApplicationSerializer(application, data=request.data)
        if serializer.is_valid():
            application = serializer.save()
            return Response(ApplicationSerializer(application).data)
        return validation_error_response(serializer.errors)
    else:  # DELETE
        deleted = ApplicationSerializer(application).data
        application.delete()
        logger.info(f"Deleted application {deleted['name']} ({pk})")
        return Response({'message': 'Application deleted successfully', 'deleted_application': deleted})


# Public views
@api_view(['GET'])
def project_list(request):
    """Completed projects, featured first then most recently completed"""
    params = request.query_params.dict()
    cached_data, cache_key = get_cached_list(PROJECTS_LIST, params)
    if cached_data is not None:
        return Response(cached_data)

    queryset = Project.objects.filter(status='completed').order_by('-featured', '-completion_date')
    filterset = ProjectFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return validation_error_response(filterset.errors)
    data = ProjectSerializer(filterset.qs, many=True).data
    cache_list(cache_key, data)
    return Response(data)


@api_view(['GET'])
def project_by_slug(request, slug):
    project = get_object_or_404(Project, slug=slug)
    return Response(ProjectSerializer(project).data)


@api_view(['GET'])
def application_list(request):
    """Active applications, optionally filtered by ``?category=``"""
    params = request.query_params.dict()
    cached_data, cache_key = get_cached_list(APPLICATIONS_LIST, params)
    if cached_data is not None:
        return Response(cached_data)

    queryset = _application_queryset().filter(is_active=True).order_by('-featured', 'display_order', 'name')
    filterset = ApplicationFilter(request.query_params, queryset=queryset)
    if not filterset.is_valid():
        return validation_error_response(filterset.errors)
    data = ApplicationSerializer(filterset.qs, many=True).data
    cache_list(cache_key, data)
    return Response(data)


@api_view(['GET'])
def application_by_slug(request, slug):
    """
    Active application by slug.

    Each read bumps ``stats.view_count``; the counter is written with a
    queryset update so the row's ``updated_at`` and the list caches are
    left alone.
    """
    application = get_object_or_404(_application_queryset(), slug=slug, is_active=True)

    stats = dict(application.stats or {})
    stats['view_count'] = int(stats.get('view_count') or 0) + 1
    stats['last_updated'] = timezone.now().isoformat()
    Application.objects.filter(pk=application.pk).update(stats=stats)
    application.stats = stats

    return Response(ApplicationSerializer(application).data)
