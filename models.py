from dataclasses import dataclass

FALLBACK = "Match Stats will Update Soon"


class ValidationError(ValueError):
    """Raised when an inbound score query is unusable."""


@dataclass
class ScoreQuery:
    id: str

    @classmethod
    def from_args(cls, args):
        match_id = args.get('id')
        if not match_id:
            raise ValidationError("Match ID is required")
        return cls(id=match_id)


@dataclass
class ScoreResult:
    """Fields scraped from a match page. Missing values hold FALLBACK."""
    title: str = FALLBACK
    update: str = FALLBACK
    match_date: str = FALLBACK
    livescore: str = FALLBACK
    runrate: str = FALLBACK

    def to_dict(self):
        return {
            'title': self.title,
            'update': self.update,
            'matchDate': self.match_date,
            'livescore': self.livescore,
            'runrate': self.runrate,
        }
