"""사용자 CRUD API 테스트.

User CRUD API tests — Registration, update, delete, info/list/page endpoints.
Covers duplicate usernames, password hashing and role id validation.
"""

from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.utils.password import hash_password, verify_password
from tests.conftest import auth_header

URL = "/user"


async def _user_count(db: AsyncSession) -> int:
    return (await db.execute(select(func.count()).select_from(User))).scalar()


class TestUserAdd:
    """사용자 등록 테스트."""

    async def test_add_user_hashes_password(self, client: AsyncClient):
        """등록 성공 — id가 채워지고 비밀번호는 해시로 저장."""
        res = await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        assert res.status_code == 200
        body = res.json()
        assert body["code"] == 200
        assert body["message"] == "success"
        data = body["data"]
        assert isinstance(data["id"], int)
        assert data["username"] == "a"
        assert data["password"] != "p"
        assert verify_password("p", data["password"])
        assert data["createTime"] is not None

    async def test_add_duplicate_username_fails(self, client: AsyncClient, db: AsyncSession):
        """중복 아이디 등록 실패 — 저장소는 변경되지 않음."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        before = await _user_count(db)

        res = await client.post(f"{URL}/add", json={"username": "a", "password": "other"})
        assert res.status_code == 200
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "用户已存在"
        assert body["data"] is None
        assert await _user_count(db) == before

    async def test_add_user_with_roles(self, client: AsyncClient, admin_token, admin_role):
        """인증된 등록 — 역할 ID 문자열 정규화 (공백, 중복 제거)."""
        res = await client.post(f"{URL}/add", json={
            "username": "editor",
            "password": "secret",
            "nickname": "ed",
            "roleId": f" {admin_role.id}, {admin_role.id} ",
        }, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert data["roleId"] == str(admin_role.id)
        assert data["nickname"] == "ed"

    async def test_add_user_with_unknown_role_fails(self, client: AsyncClient, admin_token):
        """존재하지 않는 역할 ID로 등록 실패."""
        res = await client.post(
            f"{URL}/add", json={"username": "x", "password": "p", "roleId": "999"}, headers=auth_header(admin_token)
        )
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "角色不存在"

    async def test_add_user_with_non_ascii_digit_role_fails(self, client: AsyncClient, admin_token, admin_role):
        """숫자처럼 보이는 유니코드 문자 (²) — 역할 없음으로 처리."""
        res = await client.post(
            f"{URL}/add", json={"username": "x", "password": "p", "roleId": "\u00b2"}, headers=auth_header(admin_token)
        )
        assert res.status_code == 200
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "角色不存在"

    async def test_anonymous_add_ignores_role_id(self, client: AsyncClient, admin_role, captcha_disabled):
        """익명 회원가입은 역할을 부여하지 않음 — 로그인 후에도 권한 없음."""
        res = await client.post(f"{URL}/add", json={
            "username": "mallory",
            "password": "p",
            "roleId": str(admin_role.id),
        })
        body = res.json()
        assert body["code"] == 200
        assert body["data"]["roleId"] is None

        res = await client.post(f"{URL}/login", json={"username": "mallory", "password": "p"})
        token = res.json()["data"]["token"]
        me = (await client.post(f"{URL}/me", headers=auth_header(token))).json()["data"]
        assert me["roles"] == []
        assert me["perms"] == []
        assert me["menus"] == []

    async def test_add_with_invalid_token_rejected(self, client: AsyncClient):
        """잘못된 토큰으로 등록 — 익명으로 처리하지 않고 401."""
        res = await client.post(
            f"{URL}/add", json={"username": "x", "password": "p"}, headers=auth_header("not-a-token")
        )
        assert res.status_code == 401

    async def test_add_user_missing_password(self, client: AsyncClient):
        """필수 필드 누락 — 검증 오류도 오류 봉투로 응답."""
        res = await client.post(f"{URL}/add", json={"username": "x"})
        assert res.status_code == 200
        body = res.json()
        assert body["code"] == 900
        assert "password" in body["message"]


class TestUserUpdate:
    """사용자 수정 테스트."""

    async def test_update_rehashes_password(self, client: AsyncClient, admin_token, admin_user, db: AsyncSession):
        """비밀번호 변경 시 해시로 저장."""
        res = await client.post(f"{URL}/update", json={
            "id": admin_user.id,
            "password": "new-password",
            "realname": "Root",
        }, headers=auth_header(admin_token))
        body = res.json()
        assert body["code"] == 200
        assert body["data"]["realname"] == "Root"

        await db.refresh(admin_user)
        assert admin_user.password != "new-password"
        assert verify_password("new-password", admin_user.password)

    async def test_update_keeps_existing_hash(self, client: AsyncClient, admin_token, admin_user, db: AsyncSession):
        """조회한 해시를 그대로 되돌려 보내면 이중 해싱하지 않음."""
        stored = admin_user.password
        res = await client.post(f"{URL}/update", json={
            "id": admin_user.id,
            "password": stored,
            "nickname": "boss",
        }, headers=auth_header(admin_token))
        assert res.json()["code"] == 200

        await db.refresh(admin_user)
        assert admin_user.password == stored
        assert verify_password("admin123", admin_user.password)

    async def test_update_hashes_hash_shaped_plaintext(self, client: AsyncClient, admin_token, admin_user, db: AsyncSession):
        """해시 형식의 평문도 저장된 해시와 다르면 해싱."""
        plain = "$2b$12$" + "a" * 53
        res = await client.post(f"{URL}/update", json={
            "id": admin_user.id,
            "password": plain,
        }, headers=auth_header(admin_token))
        assert res.json()["code"] == 200

        await db.refresh(admin_user)
        assert admin_user.password != plain
        assert verify_password(plain, admin_user.password)

    async def test_update_only_given_fields(self, client: AsyncClient, admin_token, admin_user):
        """부분 업데이트 — 전달하지 않은 필드는 유지."""
        res = await client.post(f"{URL}/update", json={
            "id": admin_user.id,
            "nickname": "boss",
        }, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert data["nickname"] == "boss"
        assert data["realname"] == "管理员"
        assert data["username"] == "admin"

    async def test_update_to_taken_username_fails(self, client: AsyncClient, admin_token, admin_user):
        """다른 사용자의 아이디로 변경 실패."""
        await client.post(f"{URL}/add", json={"username": "other", "password": "p"})
        res = await client.post(f"{URL}/update", json={
            "id": admin_user.id,
            "username": "other",
        }, headers=auth_header(admin_token))
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "用户已存在"

    async def test_update_unknown_user_fails(self, client: AsyncClient, admin_token):
        """존재하지 않는 사용자 수정 실패."""
        res = await client.post(f"{URL}/update", json={"id": 9999, "nickname": "x"}, headers=auth_header(admin_token))
        body = res.json()
        assert body["code"] == 900
        assert body["message"] == "数据不存在"

    async def test_update_without_id_fails(self, client: AsyncClient, admin_token):
        """id 누락 시 오류 봉투."""
        res = await client.post(f"{URL}/update", json={"nickname": "x"}, headers=auth_header(admin_token))
        assert res.json()["code"] == 900


class TestUserQuery:
    """사용자 조회 테스트 — info/list/page."""

    async def test_page_returns_requested_slice(self, client: AsyncClient, admin_token, admin_user, db: AsyncSession):
        """page=2,size=10 — 최대 10건, total은 전체 건수."""
        password = hash_password("p")
        for i in range(24):
            db.add(User(username=f"user{i:02d}", password=password))
        await db.commit()

        res = await client.post(f"{URL}/page", json={"page": 2, "size": 10}, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert len(data["list"]) == 10
        assert data["pagination"] == {"page": 2, "size": 10, "total": 25}

        res = await client.post(f"{URL}/page", json={"page": 3, "size": 10}, headers=auth_header(admin_token))
        assert len(res.json()["data"]["list"]) == 5

    async def test_page_defaults(self, client: AsyncClient, admin_token):
        """page/size 기본값 1/20."""
        res = await client.post(f"{URL}/page", json={}, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert data["pagination"] == {"page": 1, "size": 20, "total": 1}
        assert data["list"][0]["username"] == "admin"

    async def test_page_with_filter(self, client: AsyncClient, admin_token):
        """필터가 있으면 total은 일치 건수."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        res = await client.post(f"{URL}/page", json={"username": "a"}, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert data["pagination"]["total"] == 1
        assert data["list"][0]["username"] == "a"

    async def test_page_invalid_size(self, client: AsyncClient, admin_token):
        """잘못된 size는 오류 봉투."""
        res = await client.post(f"{URL}/page", json={"size": 0}, headers=auth_header(admin_token))
        assert res.status_code == 200
        assert res.json()["code"] == 900

    async def test_list_with_camel_case_filter(self, client: AsyncClient, admin_token, admin_role):
        """camelCase 필터 키 (roleId) 지원, 알 수 없는 키는 무시."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})
        res = await client.post(f"{URL}/list", json={
            "roleId": str(admin_role.id),
            "unknownField": "ignored",
        }, headers=auth_header(admin_token))
        data = res.json()["data"]
        assert [u["username"] for u in data] == ["admin"]

    async def test_list_without_body(self, client: AsyncClient, admin_token):
        """본문 없이 전체 목록."""
        res = await client.post(f"{URL}/list", headers=auth_header(admin_token))
        assert res.json()["code"] == 200
        assert len(res.json()["data"]) == 1

    async def test_info(self, client: AsyncClient, admin_token, admin_user):
        """단건 조회 및 없는 경우 null."""
        res = await client.post(f"{URL}/info", json={"id": admin_user.id}, headers=auth_header(admin_token))
        assert res.json()["data"]["username"] == "admin"

        res = await client.post(f"{URL}/info", json={"id": 9999}, headers=auth_header(admin_token))
        body = res.json()
        assert body["code"] == 200
        assert body["data"] is None

    async def test_password_is_not_a_filter(self, client: AsyncClient, admin_token, admin_user):
        """비밀번호 컬럼은 필터로 사용되지 않음 — 해시 추측 불가."""
        await client.post(f"{URL}/add", json={"username": "a", "password": "p"})

        for guess in (admin_user.password, "wrong"):
            res = await client.post(f"{URL}/list", json={"password": guess}, headers=auth_header(admin_token))
            assert [u["username"] for u in res.json()["data"]] == ["admin", "a"]

            res = await client.post(f"{URL}/page", json={"password": guess}, headers=auth_header(admin_token))
            assert res.json()["data"]["pagination"]["total"] == 2

        res = await client.post(f"{URL}/info", json={"password": "wrong"}, headers=auth_header(admin_token))
        assert res.json()["data"]["username"] == "admin"


class TestUserDelete:
    """사용자 삭제 테스트."""

    async def test_delete_single_and_many(self, client: AsyncClient, admin_token, db: AsyncSession):
        """단일 ID 및 ID 목록 삭제."""
        ids = []
        for name in ("a", "b", "c"):
            res = await client.post(f"{URL}/add", json={"username": name, "password": "p"})
            ids.append(res.json()["data"]["id"])

        res = await client.post(f"{URL}/delete", json={"ids": ids[0]}, headers=auth_header(admin_token))
        assert res.json()["code"] == 200
        res = await client.post(f"{URL}/delete", json={"ids": ids[1:]}, headers=auth_header(admin_token))
        assert res.json()["code"] == 200

        remaining = (await db.execute(select(User.username))).scalars().all()
        assert remaining == ["admin"]


class TestUserAuthRequired:
    """인증 필요 엔드포인트 테스트."""

    async def test_list_without_token(self, client: AsyncClient):
        """토큰 없이 접근 시 401 봉투."""
        res = await client.post(f"{URL}/list", json={})
        assert res.status_code == 401
        assert res.json()["code"] == 900

    async def test_list_with_invalid_token(self, client: AsyncClient):
        """잘못된 토큰으로 접근 시 401."""
        res = await client.post(f"{URL}/list", json={}, headers=auth_header("not-a-jwt"))
        assert res.status_code == 401

    async def test_token_of_deleted_user(self, client: AsyncClient, admin_token, admin_user, db: AsyncSession):
        """삭제된 사용자의 토큰은 거부."""
        await db.delete(admin_user)
        await db.commit()
        res = await client.post(f"{URL}/list", json={}, headers=auth_header(admin_token))
        assert res.status_code == 401
