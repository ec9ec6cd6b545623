"""Built-in room directory used to seed an empty database."""

from typing import Any

from .models import Zone

ROOM_CATALOG: dict[Zone, list[tuple[str, list[dict[str, Any]]]]] = {
    Zone.LEFT_WING: [
        (
            "1st FLOOR",
            [
                {"id": "maker1", "name": "제1 메이커실", "capacity": "20인"},
                {"id": "maker2", "name": "제2 메이커실", "capacity": "20인"},
                {"id": "woodwork", "name": "목공실", "capacity": "15인", "restricted": True},
                {"id": "laser", "name": "레이저실", "capacity": "15인", "restricted": True},
            ],
        ),
        (
            "2nd FLOOR",
            [
                {"id": "lab", "name": "실험실", "capacity": "30인", "restricted": True},
                {"id": "fusion1", "name": "제1 융합실", "capacity": "30인"},
                {"id": "fusion2", "name": "제2 융합실", "capacity": "30인"},
                {"id": "fusion3", "name": "제3 융합실", "capacity": "30인"},
            ],
        ),
        (
            "3rd FLOOR",
            [
                {"id": "ai", "name": "AI실", "capacity": "30인", "disabled": True},
                {"id": "computer", "name": "컴퓨터실", "capacity": "30인", "disabled": True},
            ],
        ),
        (
            "4th FLOOR",
            [
                {"id": "media", "name": "미디어실(시청각실)", "capacity": "50인", "restricted": True},
                {"id": "global", "name": "글로벌 라운지", "capacity": "40인", "restricted": True},
            ],
        ),
    ],
    Zone.ORYANG_HALL: [
        ("2nd FLOOR", [{"id": "aiReading", "name": "AI 리딩실", "capacity": "30인", "disabled": True}]),
        ("3rd FLOOR", [{"id": "career", "name": "진로실", "capacity": "30인", "disabled": True}]),
        (
            "멀티실",
            [
                {"id": "multi1", "name": "제1 멀티실", "capacity": "20인"},
                {"id": "multi2", "name": "제2 멀티실", "capacity": "20인"},
                {"id": "multi3", "name": "제3 멀티실", "capacity": "20인"},
                {"id": "multi4", "name": "제4 멀티실", "capacity": "20인"},
            ],
        ),
        (
            "4th FLOOR",
            [
                {"id": "careerCounseling", "name": "진로진학상담실", "capacity": "20인", "disabled": True},
                {"id": "selfStudy4", "name": "제4 자주실", "capacity": "30인"},
                {"id": "selfStudy5", "name": "제5 자주실", "capacity": "30인"},
                {"id": "selfStudy6", "name": "제6 자주실", "capacity": "30인"},
            ],
        ),
    ],
    Zone.RIGHT_WING: [
        (
            "STUDY cafe",
            [
                {"id": "group1", "name": "제1 그룹실", "capacity": "6인"},
                {"id": "group2", "name": "제2 그룹실", "capacity": "6인"},
                {"id": "group3", "name": "제3 그룹실", "capacity": "6인"},
                {
                    "id": "individual",
                    "name": "개인석",
                    "capacity": "선착순 배정",
                    "note": "지정좌석이 아닌 선착순 배정입니다",
                },
            ],
        ),
        (
            "3rd FLOOR Lounge",
            [
                {"id": "smallGroup1_3", "name": "제1 소그룹실", "capacity": "4인"},
                {"id": "smallGroup2_3", "name": "제2 소그룹실", "capacity": "4인"},
                {"id": "smallGroup3_3", "name": "제3 소그룹실", "capacity": "4인"},
            ],
        ),
        (
            "4th FLOOR Lounge",
            [
                {"id": "smallGroup1_4", "name": "제1 소그룹실", "capacity": "4인"},
                {"id": "smallGroup2_4", "name": "제2 소그룹실", "capacity": "4인"},
                {"id": "smallGroup3_4", "name": "제3 소그룹실", "capacity": "4인"},
            ],
        ),
    ],
}
