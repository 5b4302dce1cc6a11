import enum

class CategoryEnum(enum.Enum):
    ENTERTAINMENT = "Entertainment"
    MUSIC = "Music"
    GAMING = "Gaming"
    NEWS = "News"
    SPORTS = "Sports"
    EDUCATION = "Education"
    SCIENCE_TECHNOLOGY = "Science & Technology"
    COMEDY = "Comedy"
    MOVIES = "Movies"
    ANIME = "Anime"
    COOKING = "Cooking"
    TRAVEL = "Travel"
    FASHION = "Fashion"
    FITNESS = "Fitness"

    OTHER = "Other"

    @classmethod
    def values(cls):
        return [e.value for e in cls]


#NOTE: 목록/검색 필터에서 "All"은 카테고리 필터 없음
ALL_CATEGORIES = "All"
