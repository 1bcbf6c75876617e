"""
Re-create admin tasks for onboarding applications that have none
(left behind when task writes are best-effort, ATOMIC_WORKFLOW_WRITES=false).
Run: python -m scripts.reconcile_tasks (from project root).
"""
import asyncio
import os
import sys

# Add parent so we can import from the project root
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from database import AsyncSessionLocal, init_db
from services.workflow import reconcile_missing_tasks


async def reconcile() -> None:
    await init_db()
    async with AsyncSessionLocal() as session:
        created = await reconcile_missing_tasks(session)
    if created:
        print(f"Created tasks for applications: {', '.join(str(i) for i in created)}")
    else:
        print("Every application already has a task.")


if __name__ == "__main__":
    asyncio.run(reconcile())
