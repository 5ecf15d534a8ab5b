import logging
import os
import sqlite3
from datetime import date, datetime
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/analytics.db"


def _day_str(value: Union[str, date, datetime]) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value[:10]


def _timestamp_str(value: Union[str, datetime]) -> str:
    return value.isoformat() if isinstance(value, datetime) else value


class DatabaseManager:
    def __init__(self, db_path: str = DEFAULT_DB_PATH):
        self.db_path = db_path
        self._ensure_db_directory()
        self.init_database()

    def _ensure_db_directory(self):
        """Create data directory if it doesn't exist"""
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

    def get_connection(self):
        """Get database connection"""
        return sqlite3.connect(self.db_path)

    def init_database(self):
        """Initialize database with schema"""
        conn = self.get_connection()
        cursor = conn.cursor()

        # Posts with their engagement counters; NULL means "not reported"
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS posts (
                id TEXT NOT NULL,
                user_id TEXT NOT NULL,
                platform TEXT NOT NULL,
                caption TEXT,
                thumbnail_url TEXT,
                media_type TEXT,
                likes INTEGER,
                comments INTEGER,
                shares INTEGER,
                impressions INTEGER,
                reach INTEGER,
                engagement_rate REAL,
                posted_at DATETIME NOT NULL,
                created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (user_id, id)
            )
        ''')

        # One aggregate row per user per day
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS daily_metrics (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                engagement INTEGER DEFAULT 0,
                reach INTEGER DEFAULT 0,
                UNIQUE (user_id, date)
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_user_posted_at ON posts(user_id, posted_at)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_platform ON posts(user_id, platform)')

        conn.commit()
        conn.close()
        logger.info("Database ready at %s", self.db_path)

    # Posts
    def insert_post(self, user_id: str, post_data: Dict):
        """Insert or update a post"""
        conn = self.get_connection()
        cursor = conn.cursor()

        cursor.execute('''
            INSERT OR REPLACE INTO posts
            (id, user_id, platform, caption, thumbnail_url, media_type,
             likes, comments, shares, impressions, reach, engagement_rate,
             posted_at, created_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        ''', (
            str(post_data['id']),
            user_id,
            post_data['platform'],
            post_data.get('caption'),
            post_data.get('thumbnail_url'),
            post_data.get('media_type'),
            post_data.get('likes'),
            post_data.get('comments'),
            post_data.get('shares'),
            post_data.get('impressions'),
            post_data.get('reach'),
            post_data.get('engagement_rate'),
            _timestamp_str(post_data['posted_at']),
            datetime.now().isoformat()
        ))

        conn.commit()
        conn.close()

    def get_posts(self, user_id: str, platform: Optional[str] = None) -> List[Dict]:
        """Get a user's posts, most recent first, optionally for one platform"""
        conn = self.get_connection()
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()

        query = 'SELECT * FROM posts WHERE user_id = ?'
        params = [user_id]

        if platform and platform.lower() != 'all':
            query += ' AND lower(platform) = ?'
            params.append(platform.lower())

        query += ' ORDER BY datetime(posted_at) DESC, posted_at DESC'

        cursor.execute(query, params)
        rows = cursor.fetchall()
        conn.close()

        return [dict(row) for row in rows]

    def get_post(self, user_id: str, post_id: str) -> Optional[Dict]:
        """Get a single post owned by the user"""
        conn = self.get_connection()
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()

        cursor.execute('SELECT * FROM posts WHERE user_id = ? AND id = ?', (user_id, str(post_id)))
        row = cursor.fetchone()
        conn.close()

        return dict(row) if row else None

    # Daily Metrics
    def insert_daily_metric(self, user_id: str, metric_data: Dict):
        """Insert or update the metrics row for one day"""
        conn = self.get_connection()
        cursor = conn.cursor()

        cursor.execute('''
            INSERT OR REPLACE INTO daily_metrics (user_id, date, engagement, reach)
            VALUES (?, ?, ?, ?)
        ''', (
            user_id,
            _day_str(metric_data['date']),
            metric_data.get('engagement', 0),
            metric_data.get('reach', 0),
        ))

        conn.commit()
        conn.close()

    def get_daily_metrics(
        self,
        user_id: str,
        start_date: Union[str, date],
        end_date: Union[str, date],
    ) -> List[Dict]:
        """Get daily metrics between two dates (inclusive), oldest first"""
        conn = self.get_connection()
        conn.row_factory = sqlite3.Row
        cursor = conn.cursor()

        cursor.execute('''
            SELECT date, engagement, reach FROM daily_metrics
            WHERE user_id = ? AND date >= ? AND date <= ?
            ORDER BY date ASC
        ''', (user_id, _day_str(start_date), _day_str(end_date)))
        rows = cursor.fetchall()
        conn.close()

        return [dict(row) for row in rows]

    def delete_user_data(self, user_id: str):
        """Remove every post and daily metric belonging to the user"""
        conn = self.get_connection()
        cursor = conn.cursor()

        cursor.execute('DELETE FROM posts WHERE user_id = ?', (user_id,))
        cursor.execute('DELETE FROM daily_metrics WHERE user_id = ?', (user_id,))

        conn.commit()
        conn.close()


def init_database(db_path: str = DEFAULT_DB_PATH):
    """Initialize database - convenience function"""
    return DatabaseManager(db_path)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
