"""
Profile Repository - Data Access Layer for user profiles and roles
"""
from typing import Optional
from storefront.domain.user import UserProfile
from storefront.core.database import get_db_connection_dict


class ProfileRepository:
    """Repository for the profiles table"""

    def find_by_id(self, user_id: str) -> Optional[UserProfile]:
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, email, name, phone, avatar_url, role
                FROM profiles
                WHERE id = %s
            """, (user_id,))

            row = cursor.fetchone()
            if not row:
                return None

            return UserProfile(
                id=str(row['id']),
                email=row['email'],
                name=row.get('name'),
                phone=row.get('phone'),
                avatar_url=row.get('avatar_url'),
                role=row.get('role') or "consumer",
            )

        finally:
            cursor.close()
            conn.close()

    def get_role(self, user_id: str) -> Optional[str]:
        """Role of a user, or None when the user has no profile"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT role FROM profiles WHERE id = %s", (user_id,))
            row = cursor.fetchone()
            return row['role'] if row else None

        finally:
            cursor.close()
            conn.close()
