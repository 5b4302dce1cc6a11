from marshmallow import Schema, fields, validate


class SuccessResponseSchema(Schema):
    result = fields.String(dump_default="success", metadata={'description': '성공 여부'})
    message = fields.String(metadata={'description': '안내 메시지'})


class PaginationQuerySchema(Schema):
    limit = fields.Integer(
        load_default=20,
        validate=validate.Range(min=1, max=100),
        metadata={'description': '페이지 크기 (1~100)'}
    )
    offset = fields.Integer(
        load_default=0,
        validate=validate.Range(min=0),
        metadata={'description': '건너뛸 개수 (0 이상)'}
    )
