"""Static records backing mock mode when no database is configured."""

from datetime import datetime, timezone
from typing import Any, Dict, List

# Example certificates served by verify-certificate in mock mode.
MOCK_CERTIFICATES: List[Dict[str, Any]] = [
    {
        "certificateId": "PVI-2024-001",
        "participantName": "John Doe",
        "program": "Web Development Internship",
        "completionDate": "December 2024",
        "status": "Valid",
        "issuedDate": "2024-12-15",
        "createdAt": datetime(2024, 12, 15, tzinfo=timezone.utc),
    },
    {
        "certificateId": "PVI-2024-002",
        "participantName": "Jane Smith",
        "program": "Machine Learning Internship",
        "completionDate": "November 2024",
        "status": "Valid",
        "issuedDate": "2024-11-20",
        "createdAt": datetime(2024, 11, 20, tzinfo=timezone.utc),
    },
    {
        "certificateId": "PVI-2024-003",
        "participantName": "Mike Johnson",
        "program": "Full Stack Web Development",
        "completionDate": "October 2024",
        "status": "Valid",
        "issuedDate": "2024-10-10",
        "createdAt": datetime(2024, 10, 10, tzinfo=timezone.utc),
    },
]
