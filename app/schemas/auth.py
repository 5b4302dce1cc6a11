from marshmallow import Schema, fields, validate

from app.schemas.user import UserProfileSchema


class RegisterRequestSchema(Schema):
    email = fields.Email(required=True, metadata={'description': '이메일'})
    username = fields.String(
        required=True,
        validate=validate.Length(min=3, max=50),
        metadata={'description': '사용자 이름 (3~50자, 고유)'}
    )
    password = fields.String(
        required=True,
        validate=validate.Length(min=8),
        metadata={'description': '비밀번호 (최소 8자)'}
    )
    first_name = fields.String(
        required=True,
        validate=validate.Length(min=1, max=50),
        metadata={'description': '이름'}
    )
    last_name = fields.String(
        required=True,
        validate=validate.Length(min=1, max=50),
        metadata={'description': '성'}
    )
    is_creator = fields.Boolean(load_default=False, metadata={'description': '크리에이터로 가입 여부'})
    channel_name = fields.String(
        validate=validate.Length(max=100),
        metadata={'description': '채널명 (크리에이터, 생략 시 "이름 성")'}
    )


class LoginRequestSchema(Schema):
    email = fields.Email(required=True, metadata={'description': '이메일'})
    password = fields.String(required=True, metadata={'description': '비밀번호'})


class TokenResponseSchema(Schema):
    access_token = fields.String(required=True, metadata={'description': 'JWT 액세스 토큰'})
    refresh_token = fields.String(required=True, metadata={'description': 'JWT 리프레시 토큰'})


class AuthResultResponseSchema(TokenResponseSchema):
    user = fields.Nested(UserProfileSchema, metadata={'description': '사용자 정보'})


class ReissueRequestSchema(Schema):
    refresh_token = fields.String(required=True, metadata={'description': '리프레시 토큰'})
