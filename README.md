# zbplugins

The logic behind a set of chat-bot plugins, written as plain Python with no bot framework
underneath. Each module does one job: it parses a command, keeps state in SQLite, picks
random results or formats a reply. Connecting all of this to a chat transport is up to you.

## Modules

- `zbplugins.nsfw`: `Picture` holds classifier scores. `judge` returns the verdict for a
  rating request. `auto_judge` returns the automatic remark, or `None` when the picture is
  harmless.
- `zbplugins.runcode`: `parse_command` splits a `>runcode[raw] <language> <code>` request into
  `(raw, language, code)` and raises `ValueError` on anything else. `cut_too_long` trims
  program output after 30 line breaks or 1000 characters.
- `zbplugins.realcugan`: `choose_model` returns `(scale, denoise branch, model file name)` for
  the spell words and the image size.
- `zbplugins.tracemoe`: `SearchHit.describe` formats a scene-search hit (title, episode, time
  range).
- `zbplugins.nbnhhsh`: `guess` posts an abbreviation to the guessing service. `parse_guess`
  reads the service's JSON reply.
- `zbplugins.reborn`: `Reborn` draws weighted birthplaces and genders, and `roll` returns the
  result text. `load_rates` reads the country weights from a JSON file.
- `zbplugins.score`: `ScoreStore` keeps level points and sign-in counts. `get_rank`,
  `next_rank_score` and `hour_greeting` implement the level and greeting rules.
- `zbplugins.sleep`: `SleepStore.sleep` and `SleepStore.get_up` record a good night or a good
  morning and return `(position, elapsed timedelta)`. `split_duration`, `is_morning` and
  `is_evening` are helpers for them.
- `zbplugins.nativewife`: `WifeGallery` keeps one picture folder per group. `pick` makes a
  daily choice that depends only on the nickname and the date, and raises `NoWifeError` when
  the folder is empty. `extract_name` reads the name from a command.
- `zbplugins.tarot`: `Deck.load` builds a deck from the card and formation JSON. `draw`,
  `spread`, `describe` and `card_list_text` cover the rest. Drawn cards are `Draw` objects,
  and spreads are `Spread` objects laid out by a `Formation`.
- `zbplugins.qzone`: `QzoneStore` stores login cookies and confession-wall posts (`Emotion`,
  `EmotionStatus`) and raises `NotLoggedInError` for unknown accounts. `parse_review_ids`,
  `status_from_word` and `anonymized` are its helpers.
- `zbplugins.vtb`: `VtbStore` is a three-level menu of VTuber voice quotations. It is filled
  from `fetch_vtb_list` and `fetch_vtb_page`.

## Example

```python
import random
from zbplugins.score import ScoreStore, get_rank

with ScoreStore("score.db") as store:
    store.set_score(12345, 21)
    print(get_rank(store.get_score(12345).score))  # 2

from zbplugins.tarot import Deck

with open("tarots.json", encoding="utf-8") as cards, open("formation.json", encoding="utf-8") as forms:
    deck = Deck.load(cards.read(), forms.read())
for draw in deck.draw(3, "major", random.Random()):
    print(draw.text())
```

## What it does not do

- It has no bot, no chat connection and no command-line program. You call the functions
  yourself.
- It renders no images. Sign-in cards, ranking charts and text-as-picture replies are not
  included.
- It does not call the image classifier, upscaler, scene-search or code-running services.
  The modules only prepare their inputs and format their results.
- It has no keyword-triggered canned replies from a reply dictionary.

## Tests

```
pip install -e .[test]
pytest
```