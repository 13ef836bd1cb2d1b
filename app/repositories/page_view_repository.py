from sqlalchemy.orm import Session

from app.models.page_view import PageView


class PageViewRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, page_view_data: dict) -> PageView:
        db_page_view = PageView(**page_view_data)
        self.db.add(db_page_view)
        self.db.commit()
        self.db.refresh(db_page_view)
        return db_page_view
