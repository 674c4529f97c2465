from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import Optional

from ..database import InMemoryDatabase
from ..dependencies import get_db, read_body, require_role, validate_body
from ..models.jobs import JobCreate

from jobboard.core.schemas import UserRole

router = APIRouter(prefix="/api/v1/job", tags=["jobs"])

require_employer = require_role(UserRole.EMPLOYER)


@router.get("/getall")
async def get_all_jobs(
    city: Optional[str] = Query(None, description="Exact job location"),
    niche: Optional[str] = Query(None, description="Exact job niche"),
    search_keyword: Optional[str] = Query(
        None, alias="searchKeyword", description="Matches title, company or introduction"
    ),
    db: InMemoryDatabase = Depends(get_db)
):
    """List jobs matching the optional filters"""
    jobs = db.find_jobs(city=city, niche=niche, search_keyword=search_keyword)
    return {"success": True, "jobs": jobs, "count": len(jobs)}


@router.get("/get/{job_id}")
async def get_single_job(job_id: str, db: InMemoryDatabase = Depends(get_db)):
    """Get details for a specific job"""
    job = db.get_job(job_id)
    if not job:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return {"success": True, "job": job}


@router.post("/post", status_code=status.HTTP_201_CREATED)
async def post_job(
    request: Request,
    user: dict = Depends(require_employer),
    db: InMemoryDatabase = Depends(get_db)
):
    """Create a job posting owned by the logged-in employer"""
    job_in = validate_body(JobCreate, await read_body(request))
    if bool(job_in.personal_website_title) != bool(job_in.personal_website_url):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide both the website url and title, or leave both blank."
        )

    fields = job_in.model_dump(
        by_alias=True,
        mode="json",
        exclude={"personal_website_title", "personal_website_url"},
    )
    if job_in.personal_website_url:
        fields["personalWebsite"] = {
            "title": job_in.personal_website_title,
            "url": job_in.personal_website_url,
        }
    job = db.add_job(fields, posted_by=user["_id"])
    return {"success": True, "message": "Job posted successfully.", "job": job}


@router.get("/getmyjobs")
async def get_my_jobs(
    user: dict = Depends(require_employer),
    db: InMemoryDatabase = Depends(get_db)
):
    """List the jobs posted by the logged-in employer"""
    return {"success": True, "myJobs": db.jobs_posted_by(user["_id"])}


@router.delete("/delete/{job_id}")
async def delete_job(
    job_id: str,
    user: dict = Depends(require_employer),
    db: InMemoryDatabase = Depends(get_db)
):
    """Delete a job posting"""
    if not db.delete_job(job_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return {"success": True, "message": "Job deleted."}
