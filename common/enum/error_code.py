from enum import Enum

class APIError(Enum):
    # 1. 공통 에러
    INTERNAL_SERVER_ERROR = ("C001", "서버 내부 오류가 발생했습니다.", 500)
    INVALID_INPUT_VALUE  = ("C002", "입력값이 올바르지 않습니다.", 400)
    DB_ERROR = ("C003", "DB 작업 처리 중 오류가 발생하였습니다.", 500)
    DUPLICATE_RESOURCE = ("C004", "중복된 데이터가 존재합니다.", 409)

    # 2. 인증(Auth) 관련
    AUTH_TOKEN_EXPIRED   = ("A001", "토큰이 만료되었습니다.", 401)
    AUTH_INVALID_TOKEN   = ("A002", "유효하지 않은 토큰입니다.", 401)
    AUTH_INVALID_CREDENTIALS = ("A003", "이메일 또는 비밀번호가 올바르지 않습니다.", 401)
    AUTH_DUPLICATE_EMAIL = ("A005", "이미 가입된 이메일입니다.", 409)
    AUTH_DUPLICATE_USERNAME = ("A006", "이미 사용 중인 사용자 이름입니다.", 409)
    CREATOR_REQUIRED     = ("A007", "크리에이터 계정만 사용할 수 있습니다.", 403)

    # 3. 사용자(User) / 채널(Channel) 관련
    USER_NOT_FOUND       = ("U001", "사용자를 찾을 수 없습니다.", 404)
    CHANNEL_NOT_FOUND    = ("U002", "채널을 찾을 수 없습니다.", 404)
    SUBSCRIBE_SELF       = ("U003", "자신의 채널은 구독할 수 없습니다.", 400)

    # 4. 영상(Video) 관련
    VIDEO_NOT_FOUND      = ("V001", "영상을 찾을 수 없습니다.", 404)
    VIDEO_PRIVATE        = ("V002", "비공개 영상입니다.", 403)
    VIDEO_FILE_REQUIRED  = ("V003", "영상 파일이 필요합니다.", 400)
    VIDEO_FILE_INVALID   = ("V004", "지원하지 않는 파일 형식입니다.", 400)

    # 5. 댓글(Comment) 관련
    COMMENT_NOT_FOUND    = ("M001", "댓글을 찾을 수 없습니다.", 404)
    COMMENT_FORBIDDEN    = ("M002", "댓글에 대한 권한이 없습니다.", 403)
    PARENT_COMMENT_NOT_FOUND = ("M003", "부모 댓글을 찾을 수 없습니다.", 404)
    COMMENT_TEXT_REQUIRED = ("M004", "댓글 내용을 입력해주세요.", 400)
    COMMENT_TEXT_TOO_LONG = ("M005", "댓글은 1000자 이하로 작성해주세요.", 400)
    COMMENT_REPLY_DEPTH  = ("M006", "답글에는 답글을 달 수 없습니다.", 400)

    # 6. 검색(Search) 관련
    SEARCH_QUERY_REQUIRED = ("S001", "검색어를 입력해주세요.", 400)

    def __init__(self, code, message, status):
        self.code = code
        self.message = message
        self.status = status
