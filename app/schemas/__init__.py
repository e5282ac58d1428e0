from .common import (
	AIUsageStats,
	ApiResponse,
	CamelModel,
	Pagination,
)
from .user import (
	AuthorSummary,
	TokenResponse,
	UserResponse,
)
from .tag import TagResponse
from .category import (
	CategoryBase,
	CategoryCreate,
	CategoryUpdate,
	CategorySummary,
	CategoryResponse,
)
from .post import (
	PostBase,
	PostCreate,
	PostUpdate,
	PostAnalyticsResponse,
	PostResponse,
	PostDetailResponse,
	PostCard,
	BlogPostDetail,
	BlogHome,
)
from .ai import (
	Tone,
	Language,
	GenerateRequest,
	ImproveRequest,
	TitlesRequest,
	TopicsRequest,
	GeneratedPostResponse,
	ImprovedContentResponse,
)
from .dashboard import (
	DashboardCounters,
	DashboardPost,
	AIUsageSummary,
	DashboardStats,
)
