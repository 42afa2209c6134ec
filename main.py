"""Call QA analytics tool - Entry point."""

from dotenv import load_dotenv

from callqa_analytics.cli import app

# Load CALLQA_* settings from a .env file
load_dotenv()

if __name__ == "__main__":
    app()
