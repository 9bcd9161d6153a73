"""
数据传输对象（DTO）- 应用层与表现层之间的数据传输

部分更新 DTO 的字段全部可选：只有客户端显式提供的字段（model_fields_set）
才会写入存储，未提供即"保持不变"。
"""
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class DTOBase(BaseModel):
    """Base DTO"""

    def patch_fields(self) -> dict[str, Any]:
        """返回客户端显式提供且非空的字段"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ---------- Order ----------

# 与 orders.total 列 Numeric(12, 2) 保持一致，超出精度的金额在校验阶段拒绝
TOTAL_MAX_DIGITS = 12
TOTAL_DECIMAL_PLACES = 2


class OrderCreateDTO(DTOBase):
    """订单创建DTO"""
    total: Decimal = Field(
        ..., gt=0, max_digits=TOTAL_MAX_DIGITS, decimal_places=TOTAL_DECIMAL_PLACES,
        description="订单金额，必须为正数，最多两位小数",
    )


class OrderPatchDTO(DTOBase):
    """订单部分更新DTO"""
    total: Optional[Decimal] = Field(
        None, gt=0, max_digits=TOTAL_MAX_DIGITS, decimal_places=TOTAL_DECIMAL_PLACES,
        description="新的订单金额",
    )


class OrderResponseDTO(DTOBase):
    """订单响应DTO"""
    id: int
    total: float


# ---------- User ----------

class UserCreateDTO(DTOBase):
    """用户注册DTO"""
    email: EmailStr = Field(..., description="邮箱地址（登录账号）")
    password: str = Field(..., min_length=1, description="密码")
    name: str = Field(..., min_length=1, max_length=100, description="显示名称（不能为空白）")


class UserPatchDTO(DTOBase):
    """用户部分更新DTO（本服务仅允许修改名称）"""
    name: Optional[str] = Field(None, max_length=100)


class UserResponseDTO(DTOBase):
    """用户响应DTO - 不包含密码哈希"""
    id: str
    email: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class LoginDTO(DTOBase):
    """登录DTO

    邮箱与注册时一样经过 EmailStr 规范化（域名小写），保证能查到注册时保存的地址。
    """
    email: EmailStr = Field(..., description="邮箱")
    password: str = Field(..., min_length=1, description="密码")


class LoginResponseDTO(DTOBase):
    """登录结果：令牌与用户"""
    user: UserResponseDTO
    token: str
    token_type: str = "bearer"
    expires_in: int  # 秒


# ---------- Common ----------

class MessageDTO(DTOBase):
    """消息响应DTO"""
    message: str


class ErrorDTO(DTOBase):
    """错误响应DTO"""
    error: str
