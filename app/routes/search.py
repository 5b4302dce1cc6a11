from flask_smorest import Blueprint

from app.schemas.search import (
    SearchQuerySchema, SearchResponseSchema,
    SuggestionQuerySchema, SuggestionResponseSchema
)
from app.services.search_service import SearchService
from common.decorator.auth_decorators import public_route

search_blueprint = Blueprint(
    'search',
    __name__,
    url_prefix='/api/search',
    description='영상 / 채널 검색 API'
)


@search_blueprint.route('', methods=['GET'])
@public_route
@search_blueprint.arguments(SearchQuerySchema, location='query')
@search_blueprint.response(200, SearchResponseSchema)
def search(args):
    return SearchService.search(
        args['q'],
        search_type=args['type'],
        category=args.get('category'),
        upload_date=args.get('upload_date'),
        sort_by=args['sort_by'],
        limit=args['limit'],
        offset=args['offset']
    )


@search_blueprint.route('/suggestions', methods=['GET'])
@public_route
@search_blueprint.arguments(SuggestionQuerySchema, location='query')
@search_blueprint.response(200, SuggestionResponseSchema)
def get_suggestions(args):
    return {"suggestions": SearchService.suggestions(args['q'])}
