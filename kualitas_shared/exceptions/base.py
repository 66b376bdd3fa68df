"""
기본 도메인 예외 정의
"""


class DomainException(Exception):
    """도메인 기본 예외"""

    def __init__(self, message: str, code: str = "DOMAIN_ERROR",
                 details: dict = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class EmptyTableError(DomainException):
    """빈 테이블 오류"""

    def __init__(self, message: str = "Table has no data", details: dict = None):
        super().__init__(
            message=f"Empty table: {message}",
            code="EMPTY_TABLE",
            details=details or {}
        )


class InvalidTableError(DomainException):
    """잘못된 테이블 형식 오류"""

    def __init__(self, message: str, details: dict = None):
        super().__init__(
            message=f"Invalid table: {message}",
            code="INVALID_TABLE",
            details=details or {}
        )


class UnknownPresetError(DomainException):
    """알 수 없는 클리닝 프리셋"""

    def __init__(self, preset: str, available: list = None):
        super().__init__(
            message=f"Unknown cleaning preset: {preset}",
            code="UNKNOWN_PRESET",
            details={"preset": preset, "available": available or []}
        )
