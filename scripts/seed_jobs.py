import logging
from typing import List

from app.settings import settings
from domain.schemas import JobInput
from domain.services.job_directory import JobDirectory
from infra.db.session import Database, init_db
from infra.repositories.jobs_repository import JobsRepository

log = logging.getLogger("seed_jobs")

SAMPLE_JOBS = [
    {
        "title": "Senior Software Engineer",
        "description": "We are looking for an experienced software engineer to join our team. "
                       "You will design, develop and maintain scalable web applications.",
        "department": "Engineering",
        "location": "Remote / Karachi, Pakistan",
        "employmentType": "Full-time",
        "salaryRange": "$80,000 - $120,000",
        "requirements": "5+ years of software development\nStrong knowledge of Python and SQL\n"
                        "Experience with cloud platforms",
    },
    {
        "title": "Product Designer",
        "description": "Join our design team to create beautiful and functional products, "
                       "working closely with product managers and engineers.",
        "department": "Design",
        "location": "Hybrid / Lahore, Pakistan",
        "employmentType": "Full-time",
        "salaryRange": "$60,000 - $90,000",
        "requirements": "3+ years of product design\nProficiency in Figma\nStrong portfolio",
    },
    {
        "title": "Data Scientist",
        "description": "Extract insights from complex datasets and build predictive models "
                       "together with cross-functional teams.",
        "department": "Data & Analytics",
        "location": "Remote",
        "employmentType": "Full-time",
        "salaryRange": "$90,000 - $130,000",
        "requirements": "4+ years in data science\nPython, R, SQL\nStatistical analysis",
    },
    {
        "title": "DevOps Engineer",
        "description": "Build and maintain our cloud infrastructure, CI/CD pipelines and monitoring.",
        "department": "Engineering",
        "location": "Remote / Islamabad, Pakistan",
        "employmentType": "Full-time",
        "salaryRange": "$85,000 - $115,000",
        "requirements": "4+ years of DevOps\nDocker, Kubernetes, Terraform\nScripting",
    },
    {
        "title": "Marketing Manager",
        "description": "Lead our marketing efforts: strategy, campaigns and performance analysis.",
        "department": "Marketing",
        "location": "Karachi, Pakistan",
        "employmentType": "Full-time",
        "salaryRange": "$70,000 - $100,000",
        "requirements": "5+ years of marketing\nDigital channels\nProject management",
    },
]


def seed_jobs(directory: JobDirectory, jobs_repo: JobsRepository, samples=SAMPLE_JOBS) -> List[str]:
    """Create the sample postings whose titles are not present yet. Returns the created titles."""
    existing = jobs_repo.titles()
    created = []
    for raw in samples:
        fields = JobInput.model_validate(raw)
        if fields.title in existing:
            log.info(f"Skipping existing job: {fields.title}")
            continue
        job = directory.create(fields)
        existing.add(job.title)
        created.append(job.title)
        log.info(f"Created job {job.job_id}: {job.title}")
    return created


def main(database_url: str):
    db = Database(database_url, pool_size=1)
    init_db(db)
    repo = JobsRepository(db)
    created = seed_jobs(JobDirectory(repo, default_creator=settings.DEFAULT_JOB_CREATOR), repo)
    log.info(f"Seeding completed: {len(created)} job(s) created.")
    db.dispose()


if __name__ == "__main__":
    import argparse
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )
    parser = argparse.ArgumentParser(description="Insert sample job postings")
    parser.add_argument("--database-url", default=settings.DATABASE_URL,
                        help="SQLAlchemy URL (defaults to DATABASE_URL)")
    args = parser.parse_args()
    main(args.database_url)
