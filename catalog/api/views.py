"""
REST API endpoints for alternative URLs.

- Trigger alternative URL generation for a product, category, web site or
  the whole system (synchronously, or queued on Celery)
- Read the current alternative URL records of a product or category

All endpoints require authentication; generation is rate limited.
"""

import logging

from django.db import transaction
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes

from catalog.api.throttling import AltUrlGenerateThrottle
from catalog.models import ENTITY_MODELS, EntityKind
from catalog.services.alt_urls import (
    generate_all_alt_urls,
    generate_category_alt_urls,
    generate_product_alt_urls,
    generate_website_alt_urls,
)
from catalog.services.exporter import serialize_alt_urls
from catalog.services.stats import ResultStatus

logger = logging.getLogger(__name__)

VALID_SCOPES = ('product', 'category', 'website', 'all')

# Options a client may set; everything else is fixed by the scope
CLIENT_OPTIONS = {
    'replace_existing',
    'remove_old_locales',
    'do_child_products',
    'include_variant',
    'prevent_duplicates',
    'use_cache',
}


def _is_string_list(value):
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def _result_response(result):
    """Map a ServiceResult to a response; run-level errors are client errors."""
    http_status = status.HTTP_400_BAD_REQUEST if result.status == ResultStatus.ERROR else status.HTTP_200_OK
    return Response(result.to_dict(), status=http_status)


# ============================================================
# Generation
# ============================================================

@extend_schema(
    tags=['Alternative URLs'],
    summary='Generate alternative URLs',
    description='''
    Regenerate alternative URLs.

    Scopes:
    - product / category: a single entity given by `id`
    - website: the catalogs of `web_site_id`, `store_id` or `catalog_ids`
    - all: every category and product in the system
    ''',
    request={
        'application/json': {
            'type': 'object',
            'properties': {
                'scope': {'type': 'string', 'enum': list(VALID_SCOPES)},
                'id': {'type': 'string', 'description': 'Product or category ID'},
                'web_site_id': {'type': 'string'},
                'store_id': {'type': 'string'},
                'catalog_ids': {'type': 'array', 'items': {'type': 'string'}},
                'type': {
                    'type': 'array',
                    'items': {'type': 'string', 'enum': ['product', 'category', 'all']},
                    'default': ['all'],
                },
                'options': {'type': 'object', 'description': 'Generation options'},
                'async': {'type': 'boolean', 'default': False},
            },
            'required': ['scope'],
        }
    },
    responses={
        200: {'description': 'Generation finished (status success or failure)'},
        202: {'description': 'Generation queued'},
        400: {'description': 'Invalid request or generation could not run'},
    },
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
@throttle_classes([AltUrlGenerateThrottle])
def generate_alt_urls(request):
    """
    Regenerate alternative URLs.

    Request body:
    {
        "scope": "website",
        "web_site_id": "WebStore",
        "type": ["product", "category"],
        "options": {"replace_existing": true},
        "async": false
    }
    """
    scope = request.data.get('scope')
    if scope not in VALID_SCOPES:
        return Response(
            {'error': f'Invalid scope. Valid scopes: {", ".join(VALID_SCOPES)}'},
            status=status.HTTP_400_BAD_REQUEST
        )

    options = request.data.get('options') or {}
    if not isinstance(options, dict):
        return Response({'error': 'options must be an object'}, status=status.HTTP_400_BAD_REQUEST)
    unknown = set(options) - CLIENT_OPTIONS
    if unknown:
        return Response(
            {'error': f'Unknown options: {", ".join(sorted(unknown))}'},
            status=status.HTTP_400_BAD_REQUEST
        )

    not_bool = sorted(name for name, value in options.items() if not isinstance(value, bool))
    if not_bool:
        return Response(
            {'error': f'Options must be booleans: {", ".join(not_bool)}'},
            status=status.HTTP_400_BAD_REQUEST
        )

    type_generate = request.data.get('type') or ['all']
    entity_id = request.data.get('id')
    catalog_ids = request.data.get('catalog_ids')

    if not _is_string_list(type_generate):
        return Response({'error': 'type must be a list of strings'}, status=status.HTTP_400_BAD_REQUEST)
    if catalog_ids is not None and not _is_string_list(catalog_ids):
        return Response({'error': 'catalog_ids must be a list of strings'}, status=status.HTTP_400_BAD_REQUEST)

    if scope in ('product', 'category') and not entity_id:
        return Response({'error': 'id is required'}, status=status.HTTP_400_BAD_REQUEST)

    if request.data.get('async', False) and scope in ('website', 'all'):
        from catalog.tasks import generate_all_alt_urls_task, generate_website_alt_urls_task

        if scope == 'all':
            task = generate_all_alt_urls_task.delay(type_generate, **options)
        else:
            task = generate_website_alt_urls_task.delay(
                type_generate,
                web_site_id=request.data.get('web_site_id'),
                store_id=request.data.get('store_id'),
                catalog_ids=catalog_ids,
                **options,
            )
        logger.info(f"Queued alternative URL generation ({scope}) as task {task.id}")
        return Response({'status': 'queued', 'task_id': task.id}, status=status.HTTP_202_ACCEPTED)

    with transaction.atomic():
        if scope == 'product':
            result = generate_product_alt_urls(entity_id, **options)
        elif scope == 'category':
            result = generate_category_alt_urls(entity_id, **options)
        elif scope == 'website':
            result = generate_website_alt_urls(
                type_generate,
                web_site_id=request.data.get('web_site_id'),
                store_id=request.data.get('store_id'),
                catalog_ids=catalog_ids,
                locale=getattr(request, 'LANGUAGE_CODE', None),
                **options,
            )
        else:
            result = generate_all_alt_urls(type_generate, **options)

    return _result_response(result)


# ============================================================
# Read
# ============================================================

@extend_schema(
    tags=['Alternative URLs'],
    summary='Get alternative URLs',
    description='Current main and alternate-locale alternative URL records of a product or category.',
    parameters=[
        OpenApiParameter('kind', OpenApiTypes.STR, OpenApiParameter.PATH, enum=['product', 'category']),
        OpenApiParameter('entity_id', OpenApiTypes.STR, OpenApiParameter.PATH),
    ],
    responses={
        200: {
            'description': 'Alternative URL records',
            'content': {
                'application/json': {
                    'example': {
                        'kind': 'product',
                        'id': 'PROD-100',
                        'from_date': '2025-01-01T00:00:00+00:00',
                        'main': {'content_id': 1, 'locale': 'en_US', 'text': 'red-shirt'},
                        'alternates': [{'content_id': 2, 'locale': 'fr_FR', 'text': 'chemise-rouge'}],
                    }
                }
            }
        },
        404: {'description': 'Entity or alternative URLs not found'},
    },
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_alt_urls(request, kind, entity_id):
    """Return the current alternative URL records of one entity."""
    if kind not in EntityKind.values:
        return Response({'error': f'Invalid kind: {kind}'}, status=status.HTTP_404_NOT_FOUND)

    if not ENTITY_MODELS[kind].objects.filter(pk=entity_id).exists():
        return Response(
            {'error': f'{kind} not found for ID: {entity_id}'},
            status=status.HTTP_404_NOT_FOUND
        )

    record = serialize_alt_urls(kind, entity_id)
    if record is None:
        return Response(
            {'error': f'No alternative URLs for {kind} {entity_id}'},
            status=status.HTTP_404_NOT_FOUND
        )

    return Response(record)
