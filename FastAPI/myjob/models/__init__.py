from myjob.models.user import User, RoleName
from myjob.models.job_seeker_profile import JobSeekerProfile
from myjob.models.city import City
from myjob.models.district import District
from myjob.models.location import Location
from myjob.models.career import Career
from myjob.models.company import Company
from myjob.models.company_image import CompanyImage
from myjob.models.company_followed import CompanyFollowed
from myjob.models.resume import Resume
from myjob.models.resume_saved import ResumeSaved
from myjob.models.resume_viewed import ResumeViewed
from myjob.models.job_post import JobPost, JobPostStatus
from myjob.models.job_post_saved import JobPostSaved
from myjob.models.job_post_activity import JobPostActivity
from myjob.models.job_post_notification import JobPostNotification

__all__ = [
    "User",
    "RoleName",
    "JobSeekerProfile",
    "City",
    "District",
    "Location",
    "Career",
    "Company",
    "CompanyImage",
    "CompanyFollowed",
    "Resume",
    "ResumeSaved",
    "ResumeViewed",
    "JobPost",
    "JobPostStatus",
    "JobPostSaved",
    "JobPostActivity",
    "JobPostNotification",
]
