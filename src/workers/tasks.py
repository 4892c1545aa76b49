import logging

from celery import Task
from sqlalchemy.orm import Session

from models.database import SessionLocal
from services.brand_assignment import assign_brand_if_known
from workers.celery_app import celery_app

logger = logging.getLogger(__name__)


class DatabaseTask(Task):
    _db: Session | None = None

    @property
    def db(self) -> Session:
        if self._db is None:
            self._db = SessionLocal()
        return self._db

    def after_return(self, *args, **kwargs):
        if self._db is not None:
            self._db.close()
            self._db = None


@celery_app.task(base=DatabaseTask, bind=True)
def assign_brands(self: DatabaseTask, country_code: str, source: str, dry_run: bool = False) -> dict:
    logger.info(f"Starting brand assignment task: country={country_code}, source={source}")

    try:
        summary = assign_brand_if_known(self.db, country_code, source, dry_run=dry_run)
    except Exception as e:
        logger.error(f"Error in brand assignment task: {e}", exc_info=True)
        raise

    logger.info(f"Completed brand assignment task: {summary.to_dict()}")
    return summary.to_dict()
