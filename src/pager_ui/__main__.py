from __future__ import annotations
import argparse, json, os, sys
from dataclasses import asdict

from . import initialize, shutdown
from pager.session import ReaderSession

HELP = "Commands: n (next), p (prev), j N (jump), /text (search), f (next file), :real on|off, :pages"


def _supports_color() -> bool:
    return sys.stdout.isatty() and os.environ.get("NO_COLOR", "") == ""

CSI = "\033["
def _c(text: str, code: str) -> str:
    if not _supports_color(): return text
    return f"{CSI}{code}m{text}{CSI}0m"


def _print_status(sess: ReaderSession) -> None:
    st = sess.status()
    shown = st.text if st.real else _c("(hidden)", "2;37")
    print(f"[{st.page + 1}/{st.total}] {shown}")


def _print_matches(matches, as_json: bool) -> None:
    if as_json:
        print(json.dumps([asdict(m) for m in matches], ensure_ascii=False, indent=2))
        return
    if not matches:
        print(_c("(no matches)", "2;37")); return
    print(_c("#   Page  Index    Context", "1;37"))
    for i, m in enumerate(matches, 1):
        print(f"{i:<3} {m.page + 1:<5} {m.index:<8} {m.context}")


def _repl(sess: ReaderSession, as_json: bool) -> None:
    print("Empty line to quit.")
    print(_c(HELP, "2;37"))
    while True:
        try:
            raw = input("> ")
        except (EOFError, KeyboardInterrupt):
            print(); break
        cmd = raw.strip()
        if not cmd:
            break
        if cmd == "n":
            if not sess.next_page(): print(_c("(reveal first: :real on)", "2;36"))
        elif cmd == "p":
            if not sess.previous_page(): print(_c("(reveal first: :real on)", "2;36"))
        elif cmd.startswith("j "):
            try:
                sess.jump(int(cmd[2:].strip()) - 1)
            except ValueError:
                print(_c("(usage: j N)", "2;36")); continue
        elif cmd.startswith("/"):
            matches = sess.search(cmd[1:])
            _print_matches(matches, as_json)
            if matches:
                sess.jump(matches[0].page)
        elif cmd == "f":
            if not sess.switch_file(): print(_c("(only one file)", "2;36")); continue
            print(_c(f"(now reading {os.path.basename(sess.current_file or '')})", "2;36"))
        elif cmd in (":real on", ":real off"):
            sess.show_real(cmd.endswith("on"))
        elif cmd == ":pages":
            for p in sess.pages:
                print(f"{p.index + 1:<4} ({p.start},{p.end}) {p.content}")
            continue
        else:
            print(_c(HELP, "2;37")); continue
        _print_status(sess)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Status-bar pager CLI")
    p.add_argument("--file", default=None, help="Text file to read (overrides config filePath)")
    p.add_argument("--config", default=None, help="JSON settings file")
    p.add_argument("--workspace", default=os.getcwd(), help="Value of ${workspaceFolder}")
    p.add_argument("--page-size", type=int, default=None, help="Characters per page")
    p.add_argument("--db", default=None, help='Reading-state DSN: "sqlite:///path" or "memory://"')
    p.add_argument("--page", type=int, default=None, help="Jump to this page (1-based)")
    p.add_argument("--q", default=None, help="Search once and jump to the first match")
    p.add_argument("--json", action="store_true", help="Emit JSON rows for search results")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--verbose", action="store_true")
    args = p.parse_args(argv)

    try:
        sess = initialize(config=args.config, workspace=args.workspace, file=args.file,
                          page_size=args.page_size, db=args.db, verbose=args.verbose)
    except (FileNotFoundError, RuntimeError, ValueError) as e:
        p.error(str(e))

    try:
        sess.show_real(True)
        if args.page is not None:
            sess.jump(args.page - 1)
        if args.q:
            matches = sess.search(args.q)
            _print_matches(matches, args.json)
            if matches:
                sess.jump(matches[0].page)
        if not args.json:
            _print_status(sess)
        if args.repl:
            _repl(sess, args.json)
        return 0
    finally:
        shutdown()

if __name__ == "__main__":
    raise SystemExit(main())
