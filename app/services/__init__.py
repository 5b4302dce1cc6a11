"""
Services package
비즈니스 로직을 처리하는 서비스 레이어

- engagement_service: 좋아요/싫어요, 구독, 조회수 카운터
- comment_service: 댓글 / 답글
- video_service: 영상 목록 / 상세 / 업로드
- channel_service, user_service: 채널 조회, 프로필, 시청 기록
- search_service: 영상 / 채널 검색
- auth_service: 회원가입, 로그인, 토큰 재발급
"""

__all__ = []
