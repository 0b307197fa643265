class AutogradeError(Exception):
    """파이프라인 오류의 기본 클래스"""


class ExtractionError(AutogradeError):
    """PDF 렌더링 또는 OCR 실패"""


class FeedbackError(AutogradeError):
    """AI 피드백 생성 실패"""


class StoreError(AutogradeError):
    """제출물 JSON 파일 읽기/파싱/쓰기 실패"""
