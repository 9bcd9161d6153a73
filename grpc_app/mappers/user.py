from __future__ import annotations

from application.dto import UserPatchDTO, UserResponseDTO, LoginResponseDTO
from grpc_app.generated import user_pb2
from grpc_app.mappers.common import build_dto


def user_dto_to_proto(dto: UserResponseDTO) -> user_pb2.User:
    return user_pb2.User(id=dto.id, email=dto.email, name=dto.name or "")


def login_dto_to_proto(dto: LoginResponseDTO) -> user_pb2.LoginReply:
    return user_pb2.LoginReply(
        user=user_dto_to_proto(dto.user),
        token=dto.token,
        token_type=dto.token_type,
        expires_in=int(dto.expires_in),
    )


def patch_request_to_dto(request: user_pb2.PatchUserRequest) -> UserPatchDTO:
    if request.HasField("name"):
        return build_dto(UserPatchDTO, name=request.name)
    return UserPatchDTO()
