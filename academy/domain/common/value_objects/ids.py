from dataclasses import dataclass

from ..entity import EntityId


@dataclass(frozen=True)
class ProgramId(EntityId):
    """Strongly-typed program identifier."""


@dataclass(frozen=True)
class ModuleId(EntityId):
    """Strongly-typed catalog module identifier."""


@dataclass(frozen=True)
class CourseId(EntityId):
    """Strongly-typed course identifier."""


@dataclass(frozen=True)
class LessonId(EntityId):
    """Strongly-typed lesson identifier."""


@dataclass(frozen=True)
class QuizId(EntityId):
    """Strongly-typed quiz identifier."""


@dataclass(frozen=True)
class ExerciseId(EntityId):
    """Strongly-typed exercise identifier."""


@dataclass(frozen=True)
class TeachingGroupId(EntityId):
    """Strongly-typed teaching group identifier."""


@dataclass(frozen=True)
class UserId(EntityId):
    """Strongly-typed user identifier."""


@dataclass(frozen=True)
class EnrollmentId(EntityId):
    """Strongly-typed enrollment identifier."""


@dataclass(frozen=True)
class PaymentId(EntityId):
    """Strongly-typed payment identifier."""


@dataclass(frozen=True)
class ProgramCompletionId(EntityId):
    """Strongly-typed program completion identifier."""


@dataclass(frozen=True)
class CertificateId(EntityId):
    """Strongly-typed certificate identifier."""


@dataclass(frozen=True)
class DiscussionId(EntityId):
    """Strongly-typed discussion message identifier."""


@dataclass(frozen=True)
class BlogPostId(EntityId):
    """Strongly-typed blog post identifier."""
