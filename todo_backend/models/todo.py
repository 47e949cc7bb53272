"""Todo model."""

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Todo(Base):
    """Todo item; tags are attached through the todo_tags join table."""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="0", nullable=False
    )
    # "order" - зарезервированное слово SQL, SQLAlchemy сам возьмёт его в кавычки
    order: Mapped[int | None] = mapped_column("order", Integer, nullable=True)

    # Tags relationship (many-to-many), строки todo_tags удаляет сама БД (ON DELETE CASCADE)
    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary="todo_tags",
        back_populates="todos",
        order_by="Tag.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, title='{self.title}', completed={self.completed})>"
