import os

from dotenv import load_dotenv

load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Factor weights (sub-scores are 0-100, weights scale them into the total)
SKILLS_WEIGHT = os.getenv("TALENTMATCH_SKILLS_WEIGHT", "0.40")
EXPERIENCE_WEIGHT = os.getenv("TALENTMATCH_EXPERIENCE_WEIGHT", "0.20")
LOCATION_WEIGHT = os.getenv("TALENTMATCH_LOCATION_WEIGHT", "0.15")
JOB_TYPE_WEIGHT = os.getenv("TALENTMATCH_JOB_TYPE_WEIGHT", "0.10")
LANGUAGE_WEIGHT = os.getenv("TALENTMATCH_LANGUAGE_WEIGHT", "0.10")
SALARY_WEIGHT = os.getenv("TALENTMATCH_SALARY_WEIGHT", "0.05")

# Ranking settings
RELEVANCE_THRESHOLD = os.getenv("TALENTMATCH_RELEVANCE_THRESHOLD", "20")
RESULT_CAP = os.getenv("TALENTMATCH_RESULT_CAP", "50")

# Scoring settings
RELOCATION_SCORE = os.getenv("TALENTMATCH_RELOCATION_SCORE", "50")
EXPERIENCE_DECAY_PER_YEAR = os.getenv("TALENTMATCH_EXPERIENCE_DECAY", "20")
SKILL_MATCH_THRESHOLD = os.getenv("TALENTMATCH_SKILL_MATCH_THRESHOLD", "90")
SEARCH_MATCH_THRESHOLD = 80

# Display
DEFAULT_TOP_N = 10
