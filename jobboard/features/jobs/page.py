"""Jobs page: filter state, fetch triggers, notifications and text rendering.

The page never mutates the store directly. It subscribes to the store, issues
orchestrated actions on user interaction and renders whatever the ``jobs``
snapshot currently holds.

Fetches are triggered on mount, on every filter change and on explicit search.
When the listing fails, the error is shown once through the notifier, cleared
from the store, and the listing is fetched again (at most
``max_error_refetches`` times in a row, so a dead backend does not loop).
"""
from typing import Callable, List, Optional

from jobboard.core.api_client import ApiClient
from jobboard.core.logging import setup_logging
from jobboard.core.schemas import ALL, FilterCriteria, HiringMultiple, Job
from jobboard.core.state import JOBS, ResourceSnapshot, ResourceStatus, ResourceStore
from jobboard.features.jobs.actions import clear_job_errors, fetch_jobs

logger = setup_logging('jobs_page')

CITIES: List[str] = [
    ALL,
    "Mumbai",
    "Pune",
    "Hyderabad",
    "Bengaluru",
    "Chandigarh",
    "Delhi",
    "Gurugram",
    "Ahmedabad",
    "Noida",
    "Faridabad",
]

NICHES: List[str] = [
    ALL,
    "Software Development",
    "Web Development",
    "Cybersecurity",
    "Data Science",
    "Artificial Intelligence",
    "Cloud Computing",
    "DevOps",
    "Mobile App Development",
    "Blockchain",
    "Database Administration",
    "Network Administration",
    "UI/UX Design",
    "Game Development",
    "IoT (Internet of Things)",
    "Big Data",
    "Machine Learning",
    "IT Project Management",
    "IT Support and Helpdesk",
    "Systems Administration",
    "IT Consulting",
]


class Notifier:
    """Collects transient notifications (toasts) and logs them."""

    def __init__(self, sink: Optional[Callable[[str], None]] = None):
        self.messages: List[str] = []
        self._sink = sink

    def error(self, message: str) -> None:
        logger.warning(f"Notification: {message}")
        self.messages.append(message)
        if self._sink is not None:
            self._sink(message)


class JobsPage:
    """Controller for the job listing page.

    Args:
        store: Resource store shared with the rest of the presentation root
        client: Shared API client
        notifier: Receives one notification per displayed error
        max_error_refetches: Consecutive refetches allowed after an error
    """

    def __init__(
        self,
        store: ResourceStore,
        client: ApiClient,
        notifier: Optional[Notifier] = None,
        max_error_refetches: int = 1,
    ):
        self.store = store
        self.client = client
        self.notifier = notifier or Notifier()
        self.max_error_refetches = max_error_refetches
        self.filters = FilterCriteria(city="", niche="", search_keyword="")
        # Radio-list selection, kept in sync with the dropdown value in ``filters``.
        self.selected_city = ""
        self.selected_niche = ""
        self._error_pending = False
        self._error_refetches = 0
        self._unsubscribe = store.subscribe(self.on_state_change)

    @property
    def snapshot(self) -> ResourceSnapshot:
        return self.store[JOBS]

    def on_state_change(self, name: str, snapshot: ResourceSnapshot) -> None:
        if name != JOBS:
            return
        if snapshot.error:
            self.notifier.error(snapshot.error)
            self._error_pending = True
            clear_job_errors(self.store)
        elif snapshot.status is ResourceStatus.READY:
            self._error_refetches = 0

    async def refresh(self) -> ResourceSnapshot:
        """Fetch with the current filters, refetching once after a shown error."""
        await self._fetch()
        while self._error_pending and self._error_refetches < self.max_error_refetches:
            self._error_pending = False
            self._error_refetches += 1
            logger.info("Refetching jobs after displayed error")
            await self._fetch()
        self._error_pending = False
        return self.snapshot

    async def _fetch(self) -> None:
        await fetch_jobs(
            self.store,
            self.client,
            city=self.filters.city,
            niche=self.filters.niche,
            search_keyword=self.filters.search_keyword,
        )

    async def mount(self) -> ResourceSnapshot:
        return await self.refresh()

    def unmount(self) -> None:
        self._unsubscribe()

    def _set_city(self, city: str) -> bool:
        city = "" if city == ALL else city
        changed = city != self.filters.city
        self.filters = self.filters.model_copy(update={"city": city})
        self.selected_city = city
        return changed

    def _set_niche(self, niche: str) -> bool:
        niche = "" if niche == ALL else niche
        changed = niche != self.filters.niche
        self.filters = self.filters.model_copy(update={"niche": niche})
        self.selected_niche = niche
        return changed

    async def select_city(self, city: str) -> ResourceSnapshot:
        """Pick a city from the checklist; "All" clears the city filter."""
        if self._set_city(city):
            return await self.refresh()
        return self.snapshot

    async def choose_city(self, city: str) -> ResourceSnapshot:
        """Pick a city from the dropdown; same filter state as the checklist."""
        return await self.select_city(city)

    async def select_niche(self, niche: str) -> ResourceSnapshot:
        if self._set_niche(niche):
            return await self.refresh()
        return self.snapshot

    async def choose_niche(self, niche: str) -> ResourceSnapshot:
        return await self.select_niche(niche)

    async def apply_filters(
        self,
        city: Optional[str] = None,
        niche: Optional[str] = None,
        search_keyword: Optional[str] = None,
    ) -> ResourceSnapshot:
        """Set several filters at once and fetch a single time."""
        if city is not None:
            self._set_city(city)
        if niche is not None:
            self._set_niche(niche)
        if search_keyword is not None:
            self.set_search_keyword(search_keyword)
        return await self.refresh()

    def set_search_keyword(self, keyword: str) -> None:
        self.filters = self.filters.model_copy(update={"search_keyword": keyword})

    async def search(self) -> ResourceSnapshot:
        return await self.refresh()

    def render(self) -> str:
        snapshot = self.snapshot
        if snapshot.loading:
            return "Loading..."

        lines = [
            f"Search: {self.filters.search_keyword or ''}",
            f"City: {self.filters.city or ALL}",
            f"Niche: {self.filters.niche or ALL}",
            "",
        ]
        jobs = snapshot.data or []
        if not jobs:
            lines.append("No jobs found.")
        for job in jobs:
            lines.extend(render_job_card(job))
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"


def render_job_card(job: Job) -> List[str]:
    if job.hiring_multiple_candidates is HiringMultiple.YES:
        hiring = "Hiring Multiple Candidates"
    else:
        hiring = "Hiring"
    posted = job.job_posted_on.date().isoformat() if job.job_posted_on else "-"
    return [
        f"[{hiring}] {job.title}",
        f"  {job.company_name} | {job.location}",
        f"  Salary: {job.salary if job.salary is not None else '-'}",
        f"  Posted On: {posted}",
    ]
