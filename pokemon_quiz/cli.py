from pathlib import Path
from typing import Optional

from .api import PokeAPIClient
from .config import DATA_DIR, DB_FILE, TIME_LIMITS, setup_logging
from .models import DisplayMode, GameMode, QuizQuestion, Sender
from .quiz import QuizBuilder, QuizService, QuizSession
from .roster import RosterLoader
from .shiritori import ShiritoriGame, ShiritoriRuleError
from .stats import (BEST_SCORE, MAX_STREAK, TIME_ATTACK_BEST, TOTAL_CORRECT,
                    StatsRecorder)
from .storage import DatabaseManager

QUIT = ("quit", "q")
HINT = ("hint", "h")


class PokemonQuiz:

    def __init__(self, data_dir=DATA_DIR, api: Optional[PokeAPIClient] = None):
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.db = DatabaseManager(self.data_dir / DB_FILE)
        self.api = api or PokeAPIClient()
        self.stats = StatsRecorder(self.db)

    def close(self):
        self.api.close()

    def show_question(self, q: QuizQuestion, mode: GameMode,
                      display: DisplayMode):
        p = q.correct_pokemon
        print("")
        print("=" * 50)
        if display is DisplayMode.CRY and p.cry:
            print(f"鳴き声: {p.cry}")
        elif display is DisplayMode.SILHOUETTE:
            print(f"シルエット: {p.image}")
        else:
            print(f"画像: {p.display_image}")
            if p.is_shiny:
                print("✨ 色違い！")

        if mode is GameMode.WEAKNESS:
            print(f"{p.name} の弱点は？")
        else:
            print("このポケモンの名前は？")
        if mode is not GameMode.INPUT:
            for i, choice in enumerate(q.choices, 1):
                print(f"  {i}. {choice}")
        print("Commands: 'hint' (h), 'quit' (q)")

    def show_hint(self, q: QuizQuestion, mode: GameMode):
        p = q.correct_pokemon
        if mode is GameMode.WEAKNESS:
            print(f"Hint: タイプ {'/'.join(p.types)}")
            return
        print(f"Hint: {p.genus or '???'} / タイプ {'/'.join(p.types)}")
        if p.flavor_text:
            print(f"      {p.flavor_text}")

    def read_answer(self, q: QuizQuestion, mode: GameMode) -> Optional[str]:
        """Prompts until an answer is given; None means the player quit."""
        while True:
            raw = input("回答: ").strip()
            cmd = raw.lower()
            if cmd in QUIT:
                return None
            if cmd in HINT:
                self.show_hint(q, mode)
                continue
            if not raw:
                continue
            if mode is not GameMode.INPUT and raw.isdigit():
                index = int(raw) - 1
                if 0 <= index < len(q.choices):
                    return q.choices[index]
                print(f"1-{len(q.choices)} の番号を入力してください")
                continue
            return raw

    def play_quiz(self, mode: GameMode, display=DisplayMode.ARTWORK,
                  time_limit: Optional[int] = None):
        session = QuizSession(time_limit=time_limit)
        service = QuizService(QuizBuilder(self.api), mode)
        print("読み込み中...")
        session.start()
        try:
            while not session.is_time_up():
                q = service.next_question()
                if q is None:
                    print("問題の読み込みに失敗しました")
                    break
                self.show_question(q, mode, display)
                if session.time_left() is not None:
                    print(f"残り {session.time_left():.0f} 秒")

                answer = self.read_answer(q, mode)
                if answer is None:
                    break
                if session.is_time_up():
                    print("時間切れ！")
                    break

                correct = session.answer(q, answer)
                is_new = self.stats.record_answer(q.correct_pokemon, correct)
                if correct:
                    print("正解！")
                    if is_new:
                        print(f"{q.correct_pokemon.name} をゲットした！")
                else:
                    print(f"残念... 正解は {q.correct_answer} です！")
                print(f"スコア: {session.score} / {session.answered} | "
                      f"連続正解: {session.streak} | レベル: {session.level}")
        finally:
            service.close()

        broken = self.stats.record_game(session)
        print(f"\n結果: {session.score} / {session.answered} "
              f"(最大連続正解 {session.max_streak})")
        if any(broken.values()):
            print("新記録！")

    def play_shiritori(self):
        print("ポケモンの名前を読み込み中...")
        roster = RosterLoader(self.api, self.db).load()
        if not roster:
            print("ポケモンの名前を読み込めませんでした")
            return

        game = ShiritoriGame(roster)
        opener = game.start()
        print("")
        print("=" * 50)
        print("しりとりバトル！「ン」で終わったら負け。'quit' (q) で降参")
        print(f"相手: {opener.word}")
        while not game.is_over:
            raw = input(f"「{game.required_mora}」> ").strip()
            if raw.lower() in QUIT:
                game.give_up()
                break
            try:
                reply = game.submit(raw)
            except ShiritoriRuleError as e:
                print(e)
                continue
            if reply is not None:
                print(f"相手: {reply.word}")

        if game.winner is Sender.PLAYER:
            print(f"\nあなたの勝ち！ ({len(game.history)} ターン)")
        else:
            print(f"\nあなたの負け... ({len(game.history)} ターン)")

    def show_stats(self):
        s = self.stats.summary()
        print(f"ベストスコア: {s[BEST_SCORE]}")
        print(f"最大連続正解: {s[MAX_STREAK]}")
        print(f"累計正解数: {s[TOTAL_CORRECT]}")
        print(f"ゲットしたポケモン: {s['caught']}")
        for limit, best in sorted(s[TIME_ATTACK_BEST].items(),
                                  key=lambda kv: int(kv[0])):
            print(f"タイムアタック {limit} 秒: {best}")


def choose(prompt: str, options):
    """Asks until one of ``options`` (1-based) is picked; None on '0'."""
    while True:
        choice = input(prompt).strip()
        if choice == "0":
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(options):
            return options[int(choice) - 1]


def choose_display() -> Optional[DisplayMode]:
    print("表示: 1. イラスト 2. シルエット 3. 鳴き声 0. 戻る")
    return choose("Choose display: ", list(DisplayMode))


def main():
    setup_logging(DATA_DIR)
    game = PokemonQuiz()
    modes = [GameMode.CHOICE, GameMode.INPUT, GameMode.WEAKNESS]
    try:
        while True:
            print("\n--- ポケモンクイズ ---\n1. 選択肢モード\n2. 入力モード\n"
                  "3. 弱点クイズ\n4. しりとり\n5. タイムアタック\n6. 記録\n0. Exit")
            choice = input("Choose mode: ").strip()
            if choice == "0":
                return
            if choice in ("1", "2", "3"):
                display = choose_display()
                if display is not None:
                    game.play_quiz(modes[int(choice) - 1], display)
            elif choice == "4":
                game.play_shiritori()
            elif choice == "5":
                print("制限時間: " + " ".join(
                    f"{i}. {t}秒" for i, t in enumerate(TIME_LIMITS, 1)))
                limit = choose("Choose limit: ", TIME_LIMITS)
                if limit is not None:
                    game.play_quiz(GameMode.CHOICE, DisplayMode.ARTWORK, limit)
            elif choice == "6":
                game.show_stats()
    finally:
        game.close()


if __name__ == "__main__":
    main()
