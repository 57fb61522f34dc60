"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers captcha issuance, login/token issuance, and current user info.
"""

from app.schemas.common import CamelModel
from app.schemas.menu import MenuResponse


class CaptchaRequest(CamelModel):
    """캡차 발급 요청 — 클라이언트가 captchaId를 지정할 수 있음.

    Captcha issuance request. The client may supply its own captchaId
    (e.g. a session identifier); otherwise the server generates one.
    """

    captcha_id: str | None = None


class CaptchaResponse(CamelModel):
    """캡차 발급 응답.

    Attributes:
        captcha_id: 캐시 키 식별자 (Identifier the captcha value is cached under)
        image: SVG data-URL 이미지 (SVG image as a base64 data URL)
    """

    captcha_id: str
    image: str


class LoginRequest(CamelModel):
    """로그인 요청 스키마.

    Attributes:
        username: 사용자 로그인 아이디 (User login identifier)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
        captcha_id: 캡차 식별자 (Captcha identifier from getCaptchaImage)
        verify_code: 사용자가 입력한 캡차 값 (Captcha value typed by the user)
    """

    username: str
    password: str
    captcha_id: str | None = None
    verify_code: str | None = None


class TokenResponse(CamelModel):
    """JWT 토큰 발급 응답 스키마.

    Attributes:
        token: JWT 액세스 토큰 (Access token)
        expire: 만료까지 남은 초 (Seconds until expiry)
    """

    token: str
    expire: int


class UserMeResponse(CamelModel):
    """현재 사용자 정보 응답 스키마 (POST /user/me).

    Current user profile with resolved roles, permission strings and menus.
    """

    id: int
    username: str
    realname: str | None = None
    nickname: str | None = None
    role_id: str | None = None
    roles: list[str]
    perms: list[str]
    menus: list[MenuResponse]
