
from dotenv import load_dotenv

# Load environment variables from .env before any module reads the
# WordPress or site settings through wpblog.config.
load_dotenv()
