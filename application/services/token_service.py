"""
令牌服务 - 签发与校验 JWT 访问令牌
"""
from datetime import datetime, timedelta, timezone
import jwt

from core.exceptions import UnauthorizedException, TokenExpiredException
from core.logging_config import get_logger
from shared.codes import BusinessCode


logger = get_logger(__name__)


class TokenService:
    """
    令牌服务

    载荷: ``sub``（用户ID）、``exp``（签发时间 + TTL）、``iat``、``type``。
    使用服务端持有的对称密钥签名（默认 HS256），无刷新令牌机制。
    """

    TOKEN_TYPE = "access"

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 72 * 60):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(minutes=expire_minutes)

    @property
    def expires_in(self) -> int:
        """令牌有效期（秒）"""
        return int(self._ttl.total_seconds())

    def create_access_token(self, user_id: str) -> str:
        """创建访问令牌"""
        now = datetime.now(timezone.utc)
        to_encode = {
            "sub": str(user_id),
            "iat": now,
            "exp": now + self._ttl,
            "type": self.TOKEN_TYPE,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify_access_token(self, token: str) -> str:
        """校验访问令牌并返回用户ID

        - 过期: 抛出 TokenExpiredException
        - 签名错误/格式错误/类型错误/缺少 sub: 抛出 UnauthorizedException
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredException()
        except jwt.InvalidTokenError as exc:
            logger.info("invalid_access_token", error=str(exc))
            raise UnauthorizedException("invalid token", code=BusinessCode.TOKEN_INVALID)

        if payload.get("type") != self.TOKEN_TYPE:
            raise UnauthorizedException("invalid token", code=BusinessCode.TOKEN_INVALID)

        user_id = payload.get("sub")
        if not user_id:
            raise UnauthorizedException("invalid token", code=BusinessCode.TOKEN_INVALID)
        return str(user_id)
