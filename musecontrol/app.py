# musecontrol/app.py

import getopt
import logging
import sys

import objc
from AppKit import NSApplication, NSApplicationActivationPolicyAccessory
from Foundation import NSObject
from PyObjCTools import AppHelper

from .config import Settings, setup_logging
from .control.base import MuseControlError
from .control.controller import PlayerController
from .control.vox_helper import VoxHelper
from .watcher import NowPlayingWatcher

LONG_OPTIONS = ["log-level=", "player=", "poll-interval=", "settle-ms=", "confirm-timeout-ms="]


class AppDelegate(NSObject):

    def initWithWatcher_pollInterval_(self, watcher, poll_interval):
        self = objc.super(AppDelegate, self).init()
        if self is None:
            return None
        self.watcher = watcher
        self.poll_interval = poll_interval
        return self

    def applicationDidFinishLaunching_(self, notification):
        NSApplication.sharedApplication().setAutomaticCustomizeTouchBarMenuItemEnabled_(True)
        logging.info("Application launched. Watching for players.")
        self.watchNowPlaying()

    def applicationWillTerminate_(self, notification):
        pass

    def watchNowPlaying(self):
        try:
            self.watcher.poll()
        except Exception as e:
            logging.error(f"Error reading player state: {e}", exc_info=True)
        AppHelper.callLater(self.poll_interval, self.watchNowPlaying)


def process_command_line_args(argv: list[str]) -> dict[str, str]:
    try:
        options, _ = getopt.getopt(argv, '', LONG_OPTIONS)
    except getopt.GetoptError as e:
        logging.error(f"Command line error: {e}")
        sys.exit(1)
    return dict(options)


def build_controller(settings: Settings) -> tuple[PlayerController, NowPlayingWatcher]:
    """Composition root: one helper per supported player."""
    helpers = [
        VoxHelper(
            schedule=AppHelper.callLater,
            settle_delay=settings.settle_delay,
            confirm_timeout=settings.confirm_timeout,
        ),
    ]
    controller = PlayerController(helpers, preferred=settings.player)
    watcher = NowPlayingWatcher(controller)
    for helper in helpers:
        watcher.attach(helper)
    return controller, watcher


def main(argv: list[str] | None = None):
    options = process_command_line_args(sys.argv[1:] if argv is None else argv)
    try:
        settings = Settings.from_env().with_options(options)
    except ValueError as e:
        setup_logging()
        logging.error(f"Configuration error: {e}")
        sys.exit(1)
    setup_logging(settings.log_level)
    logging.info("Command line arguments processed successfully.")

    try:
        _, watcher = build_controller(settings)
    except MuseControlError as e:
        logging.error(f"Failed to initialize player helpers: {e}")
        sys.exit(1)

    app = NSApplication.sharedApplication()
    delegate = AppDelegate.alloc().initWithWatcher_pollInterval_(watcher, settings.poll_interval)
    app.setDelegate_(delegate)
    app.setActivationPolicy_(NSApplicationActivationPolicyAccessory)  # menu bar only, no Dock icon
    AppHelper.runEventLoop()
