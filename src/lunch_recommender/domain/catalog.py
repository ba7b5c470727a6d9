"""Built-in restaurant catalog used when no location is supplied."""

from lunch_recommender.domain.restaurants import Restaurant

SAMPLE_RESTAURANTS: tuple[Restaurant, ...] = (
    Restaurant(
        id="1",
        name="신선설농탕",
        category="한식",
        address="서울시 강남구 테헤란로 123",
        distance=200,
    ),
    Restaurant(
        id="2",
        name="옛날칼국수",
        category="칼국수",
        address="서울시 강남구 역삼로 45",
        distance=350,
    ),
    Restaurant(
        id="3",
        name="맛있는 냉면",
        category="냉면",
        address="서울시 강남구 삼성로 67",
        distance=400,
    ),
    Restaurant(
        id="4",
        name="황금돈까스",
        category="돈까스",
        address="서울시 강남구 봉은사로 89",
        distance=150,
    ),
    Restaurant(
        id="5",
        name="진짜스테이크",
        category="양식",
        address="서울시 강남구 영동대로 101",
        distance=500,
    ),
    Restaurant(
        id="6",
        name="엄마손김밥",
        category="분식",
        address="서울시 강남구 논현로 23",
        distance=100,
    ),
    Restaurant(
        id="7",
        name="삼겹살파티",
        category="고기",
        address="서울시 강남구 학동로 56",
        distance=300,
    ),
    Restaurant(
        id="8",
        name="베트남쌀국수",
        category="베트남",
        address="서울시 강남구 도산대로 78",
        distance=250,
    ),
    Restaurant(
        id="9",
        name="오마카세스시",
        category="일식",
        address="서울시 강남구 선릉로 90",
        distance=600,
    ),
    Restaurant(
        id="10",
        name="즉석떡볶이",
        category="분식",
        address="서울시 강남구 테헤란로 111",
        distance=180,
    ),
)
