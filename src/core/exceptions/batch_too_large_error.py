class BatchTooLargeError(Exception):
    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(f"Too many URLs, maximum allowed is {limit}")
