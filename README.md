# audius_tui

A terminal music player for the Audius catalogue. Browse trending and
underground tracks, list a user's favourites, search, and stream tracks
from the terminal.

## Installation

```
pip install .
```

To run the test suite, install the test extra:

```
pip install ".[test]"
pytest
```

## Running

```
audius-tui
```

The player opens full screen with mouse reporting on. The header holds
the tabs Trending Tracks, Underground Tracks, Favorites and Search;
click a tab or use the keys below to switch between them. Below the
current view is the now-playing panel with a progress bar, and below
that the help line.

## Keys

Views:

| Key              | Action                              |
|------------------|-------------------------------------|
| `T`              | trending tracks                     |
| `U`              | underground tracks                  |
| `F`              | favourites                          |
| `S`              | search view                         |
| `/`              | search view, with the input focused |
| `=`              | enter a user handle                 |
| `?`              | toggle full help                    |
| `esc`, `ctrl+c`  | quit                                |

Tables (in the focused view):

| Key       | Action              |
|-----------|---------------------|
| `↑` / `k` | move up             |
| `↓` / `j` | move down           |
| `g` / `G` | jump to top/bottom  |
| `u` / `d` | half a page up/down |
| `b` / `f` | a page up/down      |
| `enter`   | play track          |

Playback:

| Key             | Action         |
|-----------------|----------------|
| `p` / `space`   | toggle pause   |
| `r`             | toggle repeat  |
| `m`             | toggle mute    |

In the search view, `tab` switches between the input and the results
table, `/` returns to the input, and `enter` in the input runs the
search. While the search input has focus, keys go to the input rather
than to the view and playback bindings. Clicking the progress bar seeks
within the current track.

Selecting a track queues the whole list it belongs to, starting from
that track. When a track ends, playback moves on to the next one in the
queue, or plays the same track again if repeat is on. Each track is
downloaded to a temporary `.mp3` file, which is deleted when playback
moves to another file or the track ends without repeat.

## Favourites and data files

Press `=`, type an Audius handle and press `enter` (press `=` again to
cancel). The user's id is looked up and saved in `data.json` in the
application's cache directory (`utils.get_data_path()`), and the
Favorites view is refetched from that user's favourite tracks. The same
directory, created at start-up, holds `debug.log`, where failed fetches
and command errors are written.

## Library use

The modules can be used on their own. `audius_tui.api` wraps the HTTP
API and returns `models.Track` and `models.User` records; failed
requests and undecodable responses raise `api.ApiError`.

```python
from audius_tui import api, utils

for track in api.get_trending_tracks():
    print(track.title, utils.get_length_text(track.duration))
```

`data.DataManager` reads and writes the stored user id, and
`audio.AudioPlayer` plays a local audio file through the pygame mixer.

## Limitations

- There is no queue screen: `queue_view.QueueView` shows only a label
  and no key or tab opens it.
- There are no volume, skip or next/previous track keys; `,`, `.`, `o`
  and `i` appear in the player's key map but do nothing.
- Window resizing is not handled; the layout is fixed at 100 columns.