"""인증 API 테스트 — 캡차, 로그인, /user/me 엔드포인트.

Auth API tests — Captcha issuance, login and the current user endpoint.
"""

import base64
import json

import jwt
from fakeredis import FakeAsyncRedis
from httpx import AsyncClient

from app.config import settings
from tests.conftest import auth_header

URL = "/user"


async def _cached_code(cache: FakeAsyncRedis, captcha_id: str) -> str | None:
    raw = await cache.get(f"{settings.REDIS_KEY_PREFIX}captcha:{captcha_id}")
    return None if raw is None else json.loads(raw)


class TestCaptcha:
    """캡차 발급 테스트."""

    async def test_get_captcha_image(self, client: AsyncClient, cache: FakeAsyncRedis):
        """SVG data URL과 캡차 ID 발급, 값은 만료 시간과 함께 캐시."""
        res = await client.post(f"{URL}/getCaptchaImage", json={})
        body = res.json()
        assert body["code"] == 200
        data = body["data"]
        assert data["captchaId"]
        assert data["image"].startswith("data:image/svg+xml;base64,")

        svg = base64.b64decode(data["image"].split(",", 1)[1]).decode("utf-8")
        assert svg.startswith("<svg")

        code = await _cached_code(cache, data["captchaId"])
        assert code is not None
        assert len(code) == settings.CAPTCHA_LENGTH
        ttl = await cache.ttl(f"{settings.REDIS_KEY_PREFIX}captcha:{data['captchaId']}")
        assert 0 < ttl <= settings.CAPTCHA_EXPIRE_SECONDS

    async def test_client_supplied_captcha_id(self, client: AsyncClient, cache: FakeAsyncRedis):
        """클라이언트가 지정한 captchaId 사용."""
        res = await client.post(f"{URL}/getCaptchaImage", json={"captchaId": "session-1"})
        assert res.json()["data"]["captchaId"] == "session-1"
        assert await _cached_code(cache, "session-1") is not None

    async def test_captcha_without_body(self, client: AsyncClient):
        """본문 없이도 발급."""
        res = await client.post(f"{URL}/getCaptchaImage")
        assert res.json()["code"] == 200


class TestLogin:
    """로그인 테스트."""

    async def _captcha(self, client: AsyncClient, cache: FakeAsyncRedis) -> tuple[str, str]:
        res = await client.post(f"{URL}/getCaptchaImage", json={})
        captcha_id = res.json()["data"]["captchaId"]
        return captcha_id, await _cached_code(cache, captcha_id)

    async def test_login_success(self, client: AsyncClient, cache: FakeAsyncRedis, admin_user):
        """올바른 캡차와 자격 증명으로 로그인 성공."""
        captcha_id, code = await self._captcha(client, cache)
        res = await client.post(f"{URL}/login", json={
            "username": "admin",
            "password": "admin123",
            "captchaId": captcha_id,
            "verifyCode": code,
        })
        body = res.json()
        assert body["code"] == 200
        token = body["data"]["token"]
        assert body["data"]["expire"] == settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60

        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        assert payload["sub"] == str(admin_user.id)
        assert payload["username"] == "admin"
        assert payload["type"] == "access"

    async def test_login_captcha_case_insensitive(self, client: AsyncClient, cache: FakeAsyncRedis, admin_user):
        """캡차는 대소문자를 구분하지 않음."""
        captcha_id, code = await self._captcha(client, cache)
        res = await client.post(f"{URL}/login", json={
            "username": "admin",
            "password": "admin123",
            "captchaId": captcha_id,
            "verifyCode": code.swapcase(),
        })
        assert res.json()["code"] == 200

    async def test_login_wrong_captcha(self, client: AsyncClient, cache: FakeAsyncRedis, admin_user):
        """틀린 캡차 — 오류, 캡차는 소모되어 재사용 불가."""
        captcha_id, code = await self._captcha(client, cache)
        res = await client.post(f"{URL}/login", json={
            "username": "admin",
            "password": "admin123",
            "captchaId": captcha_id,
            "verifyCode": "wrong",
        })
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "验证码错误"

        res = await client.post(f"{URL}/login", json={
            "username": "admin",
            "password": "admin123",
            "captchaId": captcha_id,
            "verifyCode": code,
        })
        assert res.json()["message"] == "验证码错误"

    async def test_login_missing_captcha(self, client: AsyncClient, admin_user):
        """캡차 없이 로그인 실패."""
        res = await client.post(f"{URL}/login", json={"username": "admin", "password": "admin123"})
        assert res.json()["message"] == "验证码错误"

    async def test_login_wrong_password(self, client: AsyncClient, admin_user, captcha_disabled):
        """틀린 비밀번호 — 일반 오류 봉투."""
        res = await client.post(f"{URL}/login", json={"username": "admin", "password": "wrong"})
        assert res.status_code == 200
        body = res.json()
        assert body == {"code": 900, "data": None, "message": "账号或密码错误"}

    async def test_login_unknown_user(self, client: AsyncClient, captcha_disabled):
        """존재하지 않는 사용자 — 같은 오류 메시지."""
        res = await client.post(f"{URL}/login", json={"username": "ghost", "password": "x"})
        assert res.json()["message"] == "账号或密码错误"

    async def test_login_after_registration(self, client: AsyncClient, captcha_disabled):
        """등록한 계정으로 로그인 후 보호된 엔드포인트 접근."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        res = await client.post(f"{URL}/login", json={"username": "a", "password": "p"})
        token = res.json()["data"]["token"]

        res = await client.post(f"{URL}/list", json={}, headers=auth_header(token))
        assert res.json()["code"] == 200


class TestMe:
    """현재 사용자 정보 테스트."""

    async def test_me(self, client: AsyncClient, admin_token, menus):
        """역할 이름, 권한 문자열, 버튼을 제외한 메뉴."""
        res = await client.post(f"{URL}/me", headers=auth_header(admin_token))
        data = res.json()["data"]
        assert data["username"] == "admin"
        assert data["roles"] == ["admin"]
        assert data["perms"] == ["user:add", "user:update"]
        assert [m["name"] for m in data["menus"]] == ["系统管理", "用户管理"]
        assert "password" not in data

    async def test_me_without_roles(self, client: AsyncClient, captcha_disabled):
        """역할이 없는 사용자는 빈 목록."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        res = await client.post(f"{URL}/login", json={"username": "a", "password": "p"})
        token = res.json()["data"]["token"]

        res = await client.post(f"{URL}/me", headers=auth_header(token))
        data = res.json()["data"]
        assert data["roles"] == []
        assert data["perms"] == []
        assert data["menus"] == []

    async def test_me_requires_token(self, client: AsyncClient):
        res = await client.post(f"{URL}/me")
        assert res.status_code == 401


class TestHealth:
    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "ok"}
