# Test data and fixtures

SOFTWARE = "Software & IT Services"
BANKING = "Banking Services"

# December 2024 calendar window
DECEMBER_RANGE = {
    "start": "2024-12-01T00:00:00",
    "end": "2024-12-31T23:59:59",
}

SAMPLE_PHYSICAL_DETAILS = {
    "venue": "Moscone Center",
    "address": "747 Howard St",
    "city": "San Francisco",
    "state": "CA",
    "country": "USA",
}

SAMPLE_VIRTUAL_DETAILS = {
    "platform": "Zoom",
    "meeting_url": "https://zoom.us/j/123456789",
    "meeting_id": "123 456 789",
}

SAMPLE_SNAPSHOT = [
    {"id": 101, "ticker": "MSFT", "name": "Microsoft Corp", "is_primary": False},
    {"id": 102, "ticker": "NVDA", "name": "NVIDIA Corp", "is_primary": True},
]
