from common.enum.error_code import APIError


class BusinessError(Exception):
    """
    서비스 계층에서 발생시키는 유일한 예외
    응답 상태코드/코드는 APIError에서 가져옴
    """

    def __init__(self, error_enum: APIError, message=None):
        self.error_enum = error_enum
        self.message = message if message else error_enum.message
        super().__init__(self.message)

    @property
    def code(self):
        return self.error_enum.code

    @property
    def status(self):
        return self.error_enum.status

    def __repr__(self):
        return f'<BusinessError {self.code} ({self.status}): {self.message}>'
