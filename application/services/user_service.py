"""
用户应用服务（application/services）- 编排领域服务和处理应用逻辑
"""
from typing import List, Callable

from domain.user.entity import User
from domain.user.service import UserDomainService, PasswordService
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.common.exceptions import DomainValidationException
from application.dto import (
    UserCreateDTO, UserPatchDTO, UserResponseDTO,
    LoginDTO, LoginResponseDTO,
)
from application.services.token_service import TokenService
from core.logging_config import get_logger


logger = get_logger(__name__)


class UserApplicationService:
    """用户应用服务 - 注册、登录、令牌校验与用户 CRUD"""

    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        password_service: PasswordService,
        token_service: TokenService,
    ):
        self._uow_factory = uow_factory
        self._password_service = password_service
        self._token_service = token_service

    async def register_user(self, user_data: UserCreateDTO) -> UserResponseDTO:
        """注册新用户；名称规则与 patch_user 相同（不能为空白）"""
        self._check_name(user_data.name)
        async with self._uow_factory() as uow:
            domain_service = UserDomainService(uow.user_repository, self._password_service)
            user = await domain_service.register_user(
                email=str(user_data.email),
                password=user_data.password,
                name=user_data.name,
            )
        logger.info("user_registered", user_id=user.id)
        return self._to_response_dto(user)

    async def login(self, login_data: LoginDTO) -> LoginResponseDTO:
        """用户登录：校验凭据并签发令牌"""
        async with self._uow_factory(readonly=True) as uow:
            domain_service = UserDomainService(uow.user_repository, self._password_service)
            user = await domain_service.authenticate_user(
                email=login_data.email,
                password=login_data.password,
            )

        token = self._token_service.create_access_token(user.id)
        logger.info("user_logged_in", user_id=user.id)
        return LoginResponseDTO(
            user=self._to_response_dto(user),
            token=token,
            token_type="bearer",
            expires_in=self._token_service.expires_in,
        )

    def verify_token(self, token: str) -> str:
        """验证JWT令牌并返回用户ID（委托 TokenService）。"""
        return self._token_service.verify_access_token(token)

    async def find_user_by_id(self, user_id: str) -> UserResponseDTO:
        """获取用户信息"""
        async with self._uow_factory(readonly=True) as uow:
            user = await uow.user_repository.find_by_id(user_id)
            return self._to_response_dto(user)

    async def find_all_users(self) -> List[UserResponseDTO]:
        """获取用户列表"""
        async with self._uow_factory(readonly=True) as uow:
            users = await uow.user_repository.find_all()
            return [self._to_response_dto(user) for user in users]

    async def patch_user(self, user_id: str, patch: UserPatchDTO) -> UserResponseDTO:
        """部分更新用户（仅名称），空名称在访问仓储前即被拒绝"""
        fields = patch.patch_fields()
        if not fields:
            raise DomainValidationException("no fields to update")
        if "name" in fields:
            self._check_name(fields["name"])

        async with self._uow_factory() as uow:
            await uow.user_repository.patch(user_id, fields)
            user = await uow.user_repository.find_by_id(user_id)
        logger.info("user_patched", user_id=user_id, fields=sorted(fields))
        return self._to_response_dto(user)

    async def delete_user(self, user_id: str) -> None:
        """删除用户"""
        async with self._uow_factory() as uow:
            await uow.user_repository.delete(user_id)
        logger.info("user_deleted", user_id=user_id)

    @staticmethod
    def _check_name(name: str) -> None:
        try:
            User.validate_name(name)
        except ValueError as exc:
            raise DomainValidationException(str(exc), field="name")

    def _to_response_dto(self, user: User) -> UserResponseDTO:
        """将领域实体转换为响应DTO（去掉密码哈希）"""
        return UserResponseDTO(
            id=str(user.id),
            email=user.email,
            name=user.name,
        )
