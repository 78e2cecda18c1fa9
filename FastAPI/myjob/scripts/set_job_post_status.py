"""
Set the moderation status of a job post by slug.
Usage: python -m myjob.scripts.set_job_post_status <slug> <pending|not_approved|published>
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from myjob.database import SessionLocal, init_db
from myjob.models.job_post import JobPostStatus
from myjob.repos.job_post_repo import get_by_slug, set_status


def main():
    if len(sys.argv) < 3:
        print("Usage: python -m myjob.scripts.set_job_post_status <slug> <pending|not_approved|published>")
        sys.exit(1)
    slug = sys.argv[1].strip()
    try:
        new_status = JobPostStatus[sys.argv[2].strip().upper()]
    except KeyError:
        print(f"Unknown status: {sys.argv[2]}")
        sys.exit(1)
    init_db()
    db = SessionLocal()
    try:
        job_post = get_by_slug(db, slug)
        if not job_post:
            print(f"Job post not found: {slug}")
            sys.exit(1)
        set_status(db, job_post, new_status)
        print(f"Job post {slug} is now {new_status.name.lower()}.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
