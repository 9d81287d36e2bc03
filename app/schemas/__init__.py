from .user import (
	UserCreate,
	UserLogin,
	UserUpdate,
	UserResponse,
	UserProfileResponse,
	UserSummary,
	UserDetailsUpdate,
	UserDetailsResponse,
	UserStatusUpdate,
	AccountDelete,
	AuthResponse,
	UserUpdateResponse,
)
from .category import (
	CategoryCreate,
	CategoryUpdate,
	CategoryResponse,
	CategoryDetailResponse,
	CategoryListResponse,
)
from .post import (
	PostCreate,
	PostUpdate,
	PostResponse,
	PostListResponse,
)
from .comment import (
	CommentCreate,
	CommentUpdate,
	CommentResponse,
	CommentListResponse,
)
from .like import (
	LikeCreate,
	LikeResponse,
	LikeListResponse,
	LikeStatusResponse,
	LikeCountResponse,
)

__all__ = [
	"UserCreate",
	"UserLogin",
	"UserUpdate",
	"UserResponse",
	"UserProfileResponse",
	"UserSummary",
	"UserDetailsUpdate",
	"UserDetailsResponse",
	"UserStatusUpdate",
	"AccountDelete",
	"AuthResponse",
	"UserUpdateResponse",
	"CategoryCreate",
	"CategoryUpdate",
	"CategoryResponse",
	"CategoryDetailResponse",
	"CategoryListResponse",
	"PostCreate",
	"PostUpdate",
	"PostResponse",
	"PostListResponse",
	"CommentCreate",
	"CommentUpdate",
	"CommentResponse",
	"CommentListResponse",
	"LikeCreate",
	"LikeResponse",
	"LikeListResponse",
	"LikeStatusResponse",
	"LikeCountResponse",
]
