"""캡차 서비스 — SVG 이미지 캡차 발급 및 검증.

Captcha service — Issues SVG image captchas and verifies answers.
The expected value is cached under `captcha:{captchaId}` for
CAPTCHA_EXPIRE_SECONDS and removed on the first verification attempt.
"""

import base64
import logging
import secrets
import string
import uuid

from app.config import settings
from app.services.cache_service import CacheService

logger = logging.getLogger(__name__)

# 헷갈리는 문자 제외 (0/O, 1/I/l) — Ambiguous characters removed
_ALPHABET: str = "".join(c for c in string.ascii_letters + string.digits if c not in "0Oo1Il")
_WIDTH: int = 120
_HEIGHT: int = 40
_COLORS: tuple[str, ...] = ("#1f6feb", "#cf222e", "#1a7f37", "#8250df", "#bc4c00")


def captcha_key(captcha_id: str) -> str:
    """캡차 캐시 키 — Cache key of a captcha id."""
    return f"captcha:{captcha_id}"


def generate_code(length: int) -> str:
    """무작위 캡차 문자열 — Random captcha text."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def render_svg(code: str) -> str:
    """캡차 문자열을 SVG로 그립니다.

    Render the code as an SVG with per-character jitter and noise lines.
    """
    rng = secrets.SystemRandom()
    step: float = (_WIDTH - 20) / max(len(code), 1)
    parts: list[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{_WIDTH}" height="{_HEIGHT}" '
        f'viewBox="0 0 {_WIDTH} {_HEIGHT}">',
        f'<rect width="{_WIDTH}" height="{_HEIGHT}" fill="#f5f5f5"/>',
    ]
    for _ in range(4):
        parts.append(
            f'<line x1="{rng.randint(0, _WIDTH)}" y1="{rng.randint(0, _HEIGHT)}" '
            f'x2="{rng.randint(0, _WIDTH)}" y2="{rng.randint(0, _HEIGHT)}" '
            f'stroke="{rng.choice(_COLORS)}" stroke-width="1" opacity="0.5"/>'
        )
    for index, char in enumerate(code):
        x: float = 10 + step * index + step / 2
        y: int = rng.randint(26, 32)
        angle: int = rng.randint(-20, 20)
        parts.append(
            f'<text x="{x:.1f}" y="{y}" text-anchor="middle" font-family="Arial" '
            f'font-size="24" font-weight="bold" fill="{rng.choice(_COLORS)}" '
            f'transform="rotate({angle} {x:.1f} {y})">{char}</text>'
        )
    parts.append("</svg>")
    return "".join(parts)


def to_data_url(svg: str) -> str:
    """SVG → base64 data URL."""
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


class CaptchaService:
    """캡차 발급/검증 서비스.

    Attributes:
        cache: 캐시 서비스 (Cache holding the expected values)
    """

    def __init__(self, cache: CacheService) -> None:
        self.cache: CacheService = cache

    async def generate(self, captcha_id: str | None = None) -> tuple[str, str]:
        """캡차를 발급합니다.

        Generate a captcha, cache its value and return (captcha_id, image).
        A client supplied id replaces any previous captcha under that id.

        Args:
            captcha_id: 클라이언트 지정 ID (Client supplied id, optional)

        Returns:
            tuple[str, str]: (캡차 ID, SVG data URL) ((captcha id, SVG data URL))
        """
        captcha_id = captcha_id or uuid.uuid4().hex
        code: str = generate_code(settings.CAPTCHA_LENGTH)
        await self.cache.set(captcha_key(captcha_id), code, settings.CAPTCHA_EXPIRE_SECONDS)
        return captcha_id, to_data_url(render_svg(code))

    async def verify(self, captcha_id: str | None, value: str | None) -> bool:
        """캡차를 검증합니다 (대소문자 무시, 1회용).

        Verify an answer case-insensitively. The cached value is removed
        on every attempt, so a captcha can be tried only once.
        """
        if not captcha_id or not value:
            return False

        key: str = captcha_key(captcha_id)
        expected = await self.cache.get(key)
        await self.cache.delete(key)
        if expected is None:
            logger.info("Captcha %s missing or expired", captcha_id)
            return False
        return str(expected).lower() == value.strip().lower()
