import threading
import os
import sys
import json
import requests
from requests.adapters import HTTPAdapter

# ================= LOGGING SETUP =================
class Tee(object):
    """Mirrors everything printed to stdout/stderr into a line-buffered log file."""
    def __init__(self, name, mode):
        self.file = open(name, mode, buffering=1)
        self.original_stdout = sys.stdout
        self.original_stderr = sys.stderr
        self._lock = threading.Lock()

    def write(self, data):
        with self._lock:
            self.file.write(data)
            self.file.flush()
            self.original_stdout.write(data)
            self.original_stdout.flush()

    def flush(self):
        with self._lock:
            self.file.flush()
            self.original_stdout.flush()

    def install(self):
        sys.stdout = self
        sys.stderr = self
        return self

    def close(self):
        with self._lock:
            sys.stdout = self.original_stdout
            sys.stderr = self.original_stderr
            self.file.close()

def build_pooled_session(pool_size=20, retries=2):
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=retries, pool_block=True)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session

# ================= SAVE FUNCTIONS =================
def save_json_atomically(filepath, data):
    """Safe atomic write helper"""
    temp = f"{filepath}.tmp"
    try:
        with open(temp, 'w') as f:
            json.dump(data, f, indent=4)
        os.replace(temp, filepath)
    except Exception as e:
        print(f"Write error for {filepath}: {e}")

# ================= URL / VALUE HELPERS =================
def append_query_param(url, key, value):
    sep = '&' if '?' in url else '?'
    return f"{url}{sep}{key}={value}"

def clamp(value, low, high):
    return max(low, min(high, value))
