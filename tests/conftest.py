import os
import tempfile

# Point the import-time controller at a throwaway database before app/game load
os.environ.setdefault("APPLESUM_DB", os.path.join(tempfile.mkdtemp(prefix="applesum-"), "applesum.db"))
