"""
Utils package
유틸리티 함수들을 모아둔 패키지

- jwt_utils: JWT 토큰 생성 및 검증
- file_utils: 업로드 파일 저장 및 URL 변환
- db_utils: 기동 시 DB 연결 확인 (재시도)
- logging_utils: 로거 설정
"""

from common.utils.jwt_utils import (
    decode_token,
    create_access_token,
    create_refresh_token
)

__all__ = [
    'decode_token',
    'create_access_token',
    'create_refresh_token'
]
