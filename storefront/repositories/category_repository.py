"""
Category Repository - Data Access Layer for categories and subcategories
"""
from typing import List
from storefront.domain.product import Category, Subcategory, DEFAULT_CATEGORY_IMAGE
from storefront.core.database import get_db_connection_dict


class CategoryRepository:
    """Repository for the categories and subcategories tables"""

    @staticmethod
    def _map_row_to_category(row: dict) -> Category:
        subcategories = row.get('subcategories') or []
        return Category(
            id=str(row['id']),
            name=row['name'],
            slug=row['slug'],
            image=row.get('image_url') or DEFAULT_CATEGORY_IMAGE,
            subcategories=[
                Subcategory(id=str(sub['id']), name=sub['name'], slug=sub['slug'])
                for sub in subcategories
            ],
        )

    def find_active(self) -> List[Category]:
        """
        Active categories ordered by sort_order, each with its subcategories

        Returns:
            List of categories
        """
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT
                    c.id, c.name, c.slug, c.image_url, c.sort_order,
                    COALESCE(
                        json_agg(
                            json_build_object('id', sc.id, 'name', sc.name, 'slug', sc.slug)
                            ORDER BY sc.sort_order
                        ) FILTER (WHERE sc.id IS NOT NULL),
                        '[]'
                    ) AS subcategories
                FROM categories c
                LEFT JOIN subcategories sc ON sc.category_id = c.id
                WHERE c.is_active = true
                GROUP BY c.id
                ORDER BY c.sort_order ASC
            """)

            rows = cursor.fetchall()
            return [self._map_row_to_category(row) for row in rows]

        finally:
            cursor.close()
            conn.close()

    def find_subcategories(self, category_id: str) -> List[Subcategory]:
        """Active subcategories of a category ordered by sort_order"""
        conn = get_db_connection_dict()
        cursor = conn.cursor()

        try:
            cursor.execute("""
                SELECT id, name, slug
                FROM subcategories
                WHERE category_id = %s AND is_active = true
                ORDER BY sort_order
            """, (category_id,))

            return [
                Subcategory(id=str(row['id']), name=row['name'], slug=row['slug'])
                for row in cursor.fetchall()
            ]

        finally:
            cursor.close()
            conn.close()
