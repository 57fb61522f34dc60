"""커스텀 비즈니스 예외 모듈.

Custom business exception module.
Every business failure is raised as a single error kind carrying a
human-readable message. The application exception handler translates it
into the error envelope {code: 900, data: null, message}.

Usage:
    from app.utils.exceptions import CommonError
    raise CommonError("用户已存在")
"""

# 응답 코드 — Envelope response codes
SUCCESS_CODE: int = 200
ERROR_CODE: int = 900


class CommonError(Exception):
    """공통 비즈니스 예외 — 서비스 계층에서 발생.

    Common business exception raised from the service layer.
    Surfaces to the client as the generic error envelope.

    Args:
        message: 오류 메시지 (Human-readable error message)
        code: 응답 코드 (Envelope code, default: 900)
    """

    def __init__(self, message: str, code: int = ERROR_CODE) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int = code
