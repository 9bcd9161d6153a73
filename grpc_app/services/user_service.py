from __future__ import annotations

import grpc

from application.services.user_service import UserApplicationService
from application.dto import UserCreateDTO, LoginDTO
from core.exceptions import UnauthorizedException
from grpc_app.generated import user_pb2, user_pb2_grpc
from grpc_app.interceptors.auth import get_current_user_id
from grpc_app.mappers.common import build_dto, parse_user_id
from grpc_app.mappers.user import user_dto_to_proto, login_dto_to_proto, patch_request_to_dto


class UserService(user_pb2_grpc.UserServiceServicer):
    def __init__(self, svc: UserApplicationService) -> None:
        self._svc = svc

    # Anonymous methods
    async def Register(self, request: user_pb2.RegisterRequest, context: grpc.aio.ServicerContext) -> user_pb2.UserReply:  # type: ignore[override]
        dto = build_dto(
            UserCreateDTO,
            email=request.email,
            password=request.password,
            name=request.name,
        )
        user = await self._svc.register_user(dto)
        return user_pb2.UserReply(user=user_dto_to_proto(user))

    async def Login(self, request: user_pb2.LoginRequest, context: grpc.aio.ServicerContext) -> user_pb2.LoginReply:  # type: ignore[override]
        dto = build_dto(LoginDTO, email=request.email, password=request.password)
        result = await self._svc.login(dto)
        return login_dto_to_proto(result)

    # Authenticated methods
    async def GetMe(self, request: user_pb2.GetMeRequest, context: grpc.aio.ServicerContext) -> user_pb2.UserReply:  # type: ignore[override]
        user_id = get_current_user_id()
        if not user_id:
            raise UnauthorizedException("missing token")
        user = await self._svc.find_user_by_id(user_id)
        return user_pb2.UserReply(user=user_dto_to_proto(user))

    async def FindUserByID(self, request: user_pb2.UserIdRequest, context: grpc.aio.ServicerContext) -> user_pb2.UserReply:  # type: ignore[override]
        user = await self._svc.find_user_by_id(parse_user_id(request.id))
        return user_pb2.UserReply(user=user_dto_to_proto(user))

    async def FindAllUsers(self, request: user_pb2.FindAllUsersRequest, context: grpc.aio.ServicerContext) -> user_pb2.UserListReply:  # type: ignore[override]
        users = await self._svc.find_all_users()
        return user_pb2.UserListReply(users=[user_dto_to_proto(u) for u in users])

    async def PatchUser(self, request: user_pb2.PatchUserRequest, context: grpc.aio.ServicerContext) -> user_pb2.UserReply:  # type: ignore[override]
        user_id = parse_user_id(request.id)
        user = await self._svc.patch_user(user_id, patch_request_to_dto(request))
        return user_pb2.UserReply(user=user_dto_to_proto(user))

    async def DeleteUser(self, request: user_pb2.UserIdRequest, context: grpc.aio.ServicerContext) -> user_pb2.DeleteUserReply:  # type: ignore[override]
        await self._svc.delete_user(parse_user_id(request.id))
        return user_pb2.DeleteUserReply(message="user deleted")
