"""
Member directory service: users, groups and group membership.
"""
import logging
from sqlalchemy.orm import Session
from typing import Dict, Iterable, List
from app.models.user import User
from app.models.group import Group, GroupMember, GroupRole
from app.schemas.group import Member

logger = logging.getLogger(__name__)


def create_user(username: str, display_name: str, email: str, db: Session) -> User:
    """Create a user profile. Username and email must be unused."""
    existing = db.query(User).filter(
        (User.username == username) | (User.email == email)
    ).first()
    if existing:
        raise ValueError("Username or email already registered")

    user = User(username=username, display_name=display_name, email=email)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id} ({username})")
    return user


def get_group(group_id: int, db: Session) -> Group:
    """Get a group or raise ValueError."""
    group = db.query(Group).filter(Group.id == group_id).first()
    if not group:
        raise ValueError("Group not found")
    return group


def create_group(name: str, creator_id: int, db: Session) -> Group:
    """Create a group with its creator as admin member."""
    creator = db.query(User).filter(User.id == creator_id).first()
    if not creator:
        raise ValueError("User not found")

    group = Group(name=name, created_by=creator_id)
    db.add(group)
    db.flush()

    db.add(GroupMember(group_id=group.id, user_id=creator_id, role=GroupRole.ADMIN))
    db.commit()
    db.refresh(group)
    logger.info(f"Created group {group.id} by user {creator_id}")
    return group


def add_member(group_id: int, user_id: int, db: Session, role: GroupRole = GroupRole.MEMBER) -> GroupMember:
    """Add a user to a group."""
    get_group(group_id, db)
    if not db.query(User).filter(User.id == user_id).first():
        raise ValueError("User not found")

    if is_member(group_id, user_id, db):
        raise ValueError("User is already a member of this group")

    membership = GroupMember(group_id=group_id, user_id=user_id, role=role)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    logger.info(f"Added user {user_id} to group {group_id}")
    return membership


def remove_member(group_id: int, user_id: int, db: Session):
    """
    Remove a user from a group.
    Expense history stays attached to the user id.
    """
    membership = db.query(GroupMember).filter(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    ).first()
    if not membership:
        raise ValueError("User is not a member of this group")

    db.delete(membership)
    db.commit()
    logger.info(f"Removed user {user_id} from group {group_id}")


def change_role(group_id: int, user_id: int, role: GroupRole, db: Session) -> GroupMember:
    """Change the role of a current member."""
    membership = db.query(GroupMember).filter(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    ).first()
    if not membership:
        raise ValueError("User is not a member of this group")

    membership.role = role
    db.commit()
    db.refresh(membership)
    logger.info(f"Changed role of user {user_id} in group {group_id} to {role.value}")
    return membership


def is_member(group_id: int, user_id: int, db: Session) -> bool:
    return db.query(GroupMember).filter(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id
    ).first() is not None


def list_memberships(group_id: int, db: Session) -> List[GroupMember]:
    """Memberships of a group in join order."""
    return db.query(GroupMember).filter(
        GroupMember.group_id == group_id
    ).order_by(GroupMember.id).all()


def list_members(group_id: int, db: Session) -> List[Member]:
    """Current members of a group with their display names."""
    return [
        Member(user_id=m.user_id, display_name=m.user.display_name)
        for m in list_memberships(group_id, db)
    ]


def resolve_display_names(user_ids: Iterable[int], db: Session) -> Dict[int, str]:
    """Map user ids to display names. Unknown ids are left out."""
    ids = set(user_ids)
    if not ids:
        return {}
    users = db.query(User).filter(User.id.in_(ids)).all()
    return {user.id: user.display_name for user in users}
