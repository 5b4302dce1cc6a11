from flask import g
from flask_smorest import Blueprint

from app.schemas.auth import (
    RegisterRequestSchema, LoginRequestSchema, ReissueRequestSchema,
    AuthResultResponseSchema, TokenResponseSchema
)
from app.schemas.common_schema import SuccessResponseSchema
from app.schemas.user import UserProfileSchema
from app.services.auth_service import AuthService
from common.decorator.auth_decorators import login_required, public_route

auth_blueprint = Blueprint(
    'auth',
    __name__,
    url_prefix='/api/auth',
    description='인증 관련 API'
)


@auth_blueprint.route('/register', methods=['POST'])
@public_route
@auth_blueprint.arguments(RegisterRequestSchema)
@auth_blueprint.response(201, AuthResultResponseSchema)
def register(data):
    return AuthService.register(
        email=data['email'],
        username=data['username'],
        password=data['password'],
        first_name=data['first_name'],
        last_name=data['last_name'],
        is_creator=data.get('is_creator', False),
        channel_name=data.get('channel_name')
    )


@auth_blueprint.route('/login', methods=['POST'])
@public_route
@auth_blueprint.arguments(LoginRequestSchema)
@auth_blueprint.response(200, AuthResultResponseSchema)
def login(data):
    return AuthService.login(data['email'], data['password'])


@auth_blueprint.route('/logout', methods=['POST'])
@login_required
@auth_blueprint.response(200, SuccessResponseSchema)
@auth_blueprint.doc(security=[{"BearerAuth": []}])
def logout():
    AuthService.logout(g.user_id, g.access_token)

    return {
        "result": "success",
        "message": "로그아웃되었습니다."
    }


@auth_blueprint.route('/refresh', methods=['POST'])
@public_route
@auth_blueprint.arguments(ReissueRequestSchema)
@auth_blueprint.response(200, TokenResponseSchema)
def reissue_token(data):
    return AuthService.reissue(data['refresh_token'])


@auth_blueprint.route('/me', methods=['GET'])
@login_required
@auth_blueprint.response(200, UserProfileSchema)
@auth_blueprint.doc(security=[{"BearerAuth": []}])
def get_my_info():
    return AuthService.get_me(g.user_id)
