import os

DATA_DIR = os.path.join(os.getcwd(), 'data')


class Config:
    LEADERBOARD_FILE = os.environ.get('LEADERBOARD_FILE') or os.path.join(DATA_DIR, 'leaderboard.json')
    HOST = '0.0.0.0'
    PORT = 3000
    # How many records are kept on disk, and how many a successful POST returns
    TOP_STORED = 50
    TOP_RETURNED = 10
