"""Declarative models used by the SQLAlchemy tests.

A small blog schema covering every relationship shape the builder handles:
belongs-to (Comment.post, Comment.author with a different class name),
has-one (Person.profile), has-many (Post.comments, unidirectional Post.tags),
many-to-many (Post.users) and has-many-through a link table (Person.posts).
Person.password and User.secret are dropped by the constructor, like
attributes that are not mass-assignable.
"""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import DeclarativeBase, relationship

from fixture_forge import Buildable, SQLAlchemyAdapter

adapter = SQLAlchemyAdapter()


class Base(DeclarativeBase, Buildable):
    pass


Base.use_adapter(adapter)


posts_users = Table(
    "posts_users",
    Base.metadata,
    Column("post_id", ForeignKey("posts.id"), primary_key=True),
    Column("user_id", ForeignKey("users.id"), primary_key=True),
)

subscriptions = Table(
    "subscriptions",
    Base.metadata,
    Column("person_id", ForeignKey("people.id"), primary_key=True),
    Column("post_id", ForeignKey("posts.id"), primary_key=True),
)


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    type = Column(String(50))
    password = Column(String(255))
    admin = Column(Boolean, default=False)

    posts = relationship("Post", secondary=subscriptions, back_populates="people")
    profile = relationship("Profile", uselist=False, back_populates="person")

    def __init__(self, **kwargs):
        kwargs.pop("password", None)
        super().__init__(**kwargs)


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True)
    person_id = Column(Integer, ForeignKey("people.id"))
    handle = Column(String(50), nullable=False)

    person = relationship("Person", back_populates="profile")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True)
    title = Column(String(255))
    body = Column(Text)
    published = Column(Boolean, default=True)

    comments = relationship("Comment", back_populates="post")
    tags = relationship("Tag")
    users = relationship("User", secondary=posts_users, back_populates="posts")
    people = relationship("Person", secondary=subscriptions, back_populates="posts")


class Comment(Base):
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"))
    author_id = Column(Integer, ForeignKey("people.id"))
    body = Column(Text)

    post = relationship("Post", back_populates="comments")
    author = relationship("Person")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    post_id = Column(Integer, ForeignKey("posts.id"))
    label = Column(String(50))


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(255))
    secret = Column(String(255))

    posts = relationship("Post", secondary=posts_users, back_populates="users")

    def __init__(self, **kwargs):
        kwargs.pop("secret", None)
        super().__init__(**kwargs)
