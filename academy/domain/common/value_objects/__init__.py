"""Common value objects shared across all domain modules."""

from .ids import (
    BlogPostId,
    CertificateId,
    CourseId,
    DiscussionId,
    EnrollmentId,
    ExerciseId,
    LessonId,
    ModuleId,
    PaymentId,
    ProgramCompletionId,
    ProgramId,
    QuizId,
    TeachingGroupId,
    UserId,
)

__all__ = [
    "BlogPostId",
    "CertificateId",
    "CourseId",
    "DiscussionId",
    "EnrollmentId",
    "ExerciseId",
    "LessonId",
    "ModuleId",
    "PaymentId",
    "ProgramCompletionId",
    "ProgramId",
    "QuizId",
    "TeachingGroupId",
    "UserId",
]
