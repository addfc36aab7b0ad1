# zerobotkit

The logic behind a set of chat-bot features, with no tie to any chat protocol. Each
module takes plain values and returns plain values such as strings, dataclasses, SQLite-backed
objects and Pillow images. Your bot decides how messages arrive and how results are sent.

## Installation

```
pip install zerobotkit
```

Pillow is the only runtime dependency. `zerobotkit.guessgame.cut_music` runs `ffmpeg`, so
it must be on `PATH` if you use that function.

## Modules

| Module | What it offers |
| --- | --- |
| `zerobotkit.base16384` | `encode` and `decode` between bytes and base16384 text. Seven bytes become four CJK characters, and a marker character records a short final group. |
| `zerobotkit.event` | `AutoAgree` holds the auto-approve settings as a bit field (`from_value`, `value`, `with_option`). `encode_flag` and `decode_flag` turn a numeric request flag string into four characters and back. `parse_decision` and `parse_toggle` read the owner's commands. `should_auto_approve` decides whether a request is approved without asking, and `format_request_notice` builds the texts sent to the owner. |
| `zerobotkit.heisi` | `Item` unpacks a 10-byte record into a picture URL (`to_url`). `load_items` splits a packed file into records, and `pick` chooses one. |
| `zerobotkit.hyaku` | `load_poems` reads the 100-poem CSV into `Poem` objects. `image_names` gives the picture file names, and `parse_request` reads "百人一首" / "百人一首之n". |
| `zerobotkit.emojimix` | `match` and `face_to_emoji` recognise two-emoji messages made of `Segment`s or raw text. `mix_urls` builds the two Emoji Kitchen candidates, and `find_mix` returns the first that exists, using an HTTP HEAD by default. |
| `zerobotkit.driftbottle` | `make_bottle` builds a `Bottle` whose id is the CRC-64/ISO of its contents. `validate_message` rejects messages shorter than 10 characters. `Sea` is a SQLite store with `throw`, `pick` and `close`, and it also works as a context manager. |
| `zerobotkit.epidemic` | `parse_response` turns the feed JSON into an `Area` tree, and `find_city` searches that tree. `query_epidemic` fetches the feed and looks up a city, and `format_report` produces the reply text. |
| `zerobotkit.github` | `parse_command` reads ">github [-x ]query". It also provides `search_url` and `preview_url`, and `net_get` raises `RuntimeError("code N")` on any status other than 200. `search_repository` returns the first result, and `format_repo` describes it. |
| `zerobotkit.hearthstone` | `extract_hash`, `search_url`, `deck_image_url`, `find_deck_code` and `card_entries` (card id and picture URL for up to 5 cards). |
| `zerobotkit.funny` | `JokeBook` is a SQLite joke table with `count`, `pick`, `tell(name)` (which replaces `%name`) and `close`. |
| `zerobotkit.genshin` | `CardArchive.from_zip` reads the card archive. `draw` performs a pull, either the normal or the five-star-only pool, with a guaranteed four-star and a five-star every ninth draw. `render` paints a 1920×1080 result picture. Also here: `is_five_star_mode`, `toggle_mode` and `reply_names`. |
| `zerobotkit.fortune` | Vertical text layout for fortune slips (`glyph_positions`, `offset`, `rows_num`). The background kinds are `TABLE`, with `background_index` and `background_kind`. `cache_key` gives the cached picture name, and `draw` renders a slip to PNG. |
| `zerobotkit.musiclib` | `Config` holds the song-library settings (`load`, `save`, `default_list`, `set_default_list`, `set_music_path`). `get_list` lists the playlist folders, `local_music` and `music_lottery` pick a song, and `delete_list` removes a playlist. |
| `zerobotkit.guessgame` | `parse_music_name` reads "title - singer - other.ext" into `MusicInfo`. `cut_music` cuts three 10-second clips with ffmpeg. `GuessGame` is the round's state machine: `answer` and `timeout` return an `Outcome`. |
| `zerobotkit.gifcmd` | `parse_command` turns a meme-picture command into a `GifRequest` (`COMMANDS` maps command words to effect names). It also provides `logo_url`, `user_paths` and `material_url`. |

## Examples

```python
from zerobotkit.event import encode_flag, decode_flag

text = encode_flag("1234567890")
assert decode_flag(text) == "1234567890"
```

```python
from zerobotkit.driftbottle import Sea, make_bottle

with Sea("sea.db") as sea:
    sea.throw(make_bottle(10001, 20002, "2022-11-01 12:00:00", "alice", "a message in a bottle"))
    print(sea.pick().describe("bot"))
```

```python
from zerobotkit.emojimix import mix_urls

print(mix_urls(0x1F600, 0x1F60D))
```

```python
from zerobotkit.guessgame import GuessGame, parse_music_name

game = GuessGame(parse_music_name("Song - Singer - Album.mp3"), starter=10001)
print(game.answer(10002, "-Singer").text)
```

## What the package does not do

- It does not connect to any chat service. It has no bot runtime, no plugin registration
  and no command to run. You dispatch messages to these functions yourself.
- It ships no data. You supply the joke database, the card archive, the fortune backgrounds
  and slip texts, the poem CSV and picture files, and the packed picture records.
- `gifcmd` only recognises commands and builds URLs and paths. It does not download avatars
  or materials, and it does not render the meme pictures.
- `hearthstone` only builds request URLs and reads replies. It performs no HTTP requests.
- `musiclib` works only with songs already in the local library. It does not download songs
  or lyrics, and `music_lottery` raises `LookupError` for an empty playlist.
- Only `emojimix.find_mix`, `epidemic.query_epidemic` and the `github` helpers access the
  network. They do so with `urllib` when no fetch function is passed.

## Tests

```
pip install "zerobotkit[test]"
pytest
```