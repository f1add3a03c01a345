from sqlalchemy import Column, Integer, String, Text, ForeignKey
from storagehub.database import Base


class Plan(Base):
    __tablename__ = "plan"
    # ids are assigned by the application (max + 1), not by the database
    id = Column("plan_id", Integer, primary_key=True, autoincrement=False)
    name = Column("plan_name", String, unique=True, nullable=False)


class User(Base):
    __tablename__ = "users"
    id = Column("user_id", Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    email = Column("e_mail", String, unique=True, nullable=False)
    password = Column(String, nullable=False)  # stored as given
    plan_id = Column(Integer, ForeignKey("plan.plan_id"), nullable=True)


class Folder(Base):
    __tablename__ = "folder"
    id = Column("folder_id", Integer, primary_key=True)
    name = Column("folder_name", String, nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id"))


class File(Base):
    __tablename__ = "file"
    id = Column("file_id", Integer, primary_key=True)
    name = Column("file_name", String, nullable=False)
    size = Column("file_size", Integer, default=0)  # bytes
    user_id = Column(Integer, ForeignKey("users.user_id"))
    # no FK: files may point at folders that no longer exist
    folder_id = Column(Integer, nullable=True)
    folder_name = Column(String, nullable=True)
    content = Column(Text, nullable=True)


class Share(Base):
    __tablename__ = "share"
    id = Column("share_id", Integer, primary_key=True)
    file_id = Column(Integer, ForeignKey("file.file_id"), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"))
    shared_with = Column(Integer, ForeignKey("users.user_id"), nullable=True)
    permission = Column(String, nullable=False, default="viewer")
