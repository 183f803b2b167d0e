import unittest
from sqlalchemy import create_engine, event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from database import ActivityLog, Base, Comment, Post, User


class TestModelMetadata(unittest.TestCase):
    def test_tables(self):
        self.assertEqual(set(Base.metadata.tables),
                         {"users", "posts", "comments", "user_activity_logs"})

    def test_user_identity_columns_are_unique(self):
        columns = User.__table__.c
        self.assertTrue(columns.email.unique)
        self.assertTrue(columns.username.unique)
        self.assertFalse(columns.password.nullable)

    def test_comments_cascade_with_post(self):
        foreign_key = next(iter(Comment.__table__.c.post_id.foreign_keys))
        self.assertEqual(foreign_key.column.table.name, "posts")
        self.assertEqual(foreign_key.ondelete, "CASCADE")

    def test_ownership_columns(self):
        post_fk = next(iter(Post.__table__.c.user_id.foreign_keys))
        activity_fk = next(iter(ActivityLog.__table__.c.user_id.foreign_keys))
        self.assertEqual(post_fk.column.table.name, "users")
        self.assertEqual(activity_fk.column.table.name, "users")


class TestModelConstraints(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite://")

        @event.listens_for(self.engine, "connect")
        def enable_foreign_keys(dbapi_connection, _):
            dbapi_connection.execute("PRAGMA foreign_keys=ON")

        Base.metadata.create_all(self.engine)
        self.addCleanup(self.engine.dispose)

    @staticmethod
    def _user(suffix, **overrides):
        values = {"full_name": f"User {suffix}",
                  "email": f"user{suffix}@example.com",
                  "username": f"user{suffix}",
                  "password": "hash",
                  "age": 30}
        values.update(overrides)
        return User(**values)

    def test_duplicate_email_rejected(self):
        with Session(self.engine) as session:
            session.add(self._user("a"))
            session.commit()

            session.add(self._user("b", email="usera@example.com"))
            with self.assertRaises(IntegrityError):
                session.commit()

    def test_duplicate_username_rejected(self):
        with Session(self.engine) as session:
            session.add(self._user("a"))
            session.commit()

            session.add(self._user("b", username="usera"))
            with self.assertRaises(IntegrityError):
                session.commit()

    def test_non_positive_age_rejected(self):
        with Session(self.engine) as session:
            session.add(self._user("a", age=0))
            with self.assertRaises(IntegrityError):
                session.commit()

    def test_comment_requires_existing_post(self):
        with Session(self.engine) as session:
            user = self._user("a")
            session.add(user)
            session.commit()

            session.add(Comment(content="hi", post_id=999,
                                author_id=user.id))
            with self.assertRaises(IntegrityError):
                session.commit()

    def test_created_at_is_filled(self):
        with Session(self.engine) as session:
            user = self._user("a")
            session.add(user)
            session.commit()

            post = Post(content="hello", image_url="https://img/x.png",
                        user_id=user.id)
            session.add(post)
            session.commit()

            self.assertIsNotNone(post.created_at)
