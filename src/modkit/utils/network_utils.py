import time

import requests


def retry_with_backoff(func, max_retries=3, delay=1, backoff=2, 
                       exceptions=(requests.exceptions.RequestException,)):
    """Retry function with exponential backoff."""
    last_exception = None
    current_delay = delay
    
    for attempt in range(max_retries):
        try:
            return func()
        except exceptions as e:
            last_exception = e
            if attempt < max_retries - 1:
                time.sleep(current_delay)
                current_delay *= backoff
    
    raise last_exception
