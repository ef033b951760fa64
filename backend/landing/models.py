from landing import db


class BestScore(db.Model):
    __tablename__ = 'best_score'
    id = db.Column(db.Integer, primary_key=True)
    # memoryGame_best_<difficulty>
    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    moves = db.Column(db.Integer, nullable=False)

    def to_dict(self):
        return {
            'key': self.key,
            'moves': self.moves,
        }
