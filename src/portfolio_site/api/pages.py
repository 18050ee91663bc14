"""Server-rendered pages: the portfolio home and the photobooth."""

import json

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from portfolio_site.services.capture import capture_config

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def home() -> HTMLResponse:
    """Portfolio home page with the visitor-submitted background."""
    return HTMLResponse(_HOME_HTML)


@router.get("/photobooth", response_class=HTMLResponse)
@router.get("/Photobooth", response_class=HTMLResponse, include_in_schema=False)
async def photobooth() -> HTMLResponse:
    """Camera page that replaces the site background."""
    return HTMLResponse(render_photobooth())


def render_photobooth() -> str:
    """Render the photobooth page with the shared capture configuration."""
    config = json.dumps(capture_config()).replace("</", "<\\/")
    return _PHOTOBOOTH_HTML.replace("__CAPTURE_CONFIG__", config)


_HOME_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Jonas Sprattland</title>
    <style>
      body {
        margin: 0; min-height: 100dvh; color: #fff; background-color: #000;
        font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto,
          Helvetica, Arial, sans-serif;
      }
      .background { position: fixed; inset: 0; z-index: -2; }
      .background-cover { position: absolute; inset: 0; background: rgba(0, 0, 0, 0.3); }
      .background-image {
        position: fixed; inset: 0; z-index: -1;
        background-size: cover; background-position: center;
      }
      .submit-button { position: fixed; top: 30px; right: 30px; z-index: 100; }
      .submit-button a {
        color: #fff; text-decoration: none; padding: 12px 24px;
        border: 1px solid rgba(255, 255, 255, 0.4); border-radius: 25px;
        background: rgba(255, 255, 255, 0.1); backdrop-filter: blur(10px);
        font-size: 14px; display: inline-block;
      }
      .main-content {
        position: relative; z-index: 10; padding: 60px; min-height: 100vh;
        box-sizing: border-box; display: flex; align-items: flex-end;
        justify-content: space-between;
      }
      .main-text { flex: 1; max-width: 60%; padding-right: 60px; }
      .main-text h1, .main-text p {
        font-size: 48px; font-weight: 700; line-height: 1.1; margin: 0 0 40px 0;
      }
      .side-columns { display: flex; gap: 60px; align-items: flex-start; }
      .column { min-width: 120px; font-size: 14px; line-height: 1.6; }
      .column h3 {
        font-size: 14px; font-weight: 400; font-style: italic;
        margin: 0 0 20px 0; opacity: 0.8;
      }
      .column a { color: #fff; }
      #counter {
        position: fixed; right: 16px; bottom: 16px; z-index: 9999;
        font-size: 12px; padding: 8px 10px; border-radius: 12px;
        backdrop-filter: blur(6px); opacity: 0; pointer-events: none;
        transition: opacity 0.3s ease-in-out;
      }
      @media (max-width: 768px) {
        .main-content { flex-direction: column; align-items: flex-start; padding: 30px; }
        .main-text { max-width: 100%; padding-right: 0; }
        .main-text h1, .main-text p { font-size: 28px; }
      }
    </style>
  </head>
  <body>
    <div class="submit-button">
      <a href="/photobooth">Submit background image</a>
    </div>
    <div class="main-content">
      <div class="main-text">
        <h1>Jonas Sprattland (formerly Ersland) is a Berlin-based artist and
          director working with lens-based media.</h1>
        <p>His work is centred around combining technology and videography to
          capture scenes, moments and images in ways that amplifies reality.
          Next to his autonomous art practice he collaborates with clients in
          the fields of art and fashion.</p>
      </div>
      <div class="side-columns">
        <div class="column">
          <h3>Selected clients</h3>
          Balenciaga<br />Toro y Moi<br />Y-3<br />Nike<br />Dazed<br />
          Anonymous Club
        </div>
        <div class="column">
          <h3>Contact</h3>
          <a href="https://www.instagram.com/jonas_sprattland/">Instagram</a><br />
          <a href="mailto:jonasersland@gmail.com">Email</a>
        </div>
      </div>
    </div>
    <div class="background">
      <div class="background-cover"></div>
      <div class="background-image" id="background"></div>
    </div>
    <div id="counter" aria-live="polite" aria-label="site counter">
      <span id="counter-text">PV … · UV …</span>
    </div>
    <script>
      const background = document.getElementById('background');
      function refreshBackground() {
        background.style.backgroundImage = 'url(/bg?v=' + Date.now() + ')';
      }
      refreshBackground();
      document.addEventListener('visibilitychange', () => {
        if (!document.hidden) refreshBackground();
      });

      const counter = document.getElementById('counter');
      const counterText = document.getElementById('counter-text');
      fetch('/api/pv')
        .then(async (res) => (res.ok ? res.json() : Promise.reject(await res.text())))
        .then((data) => { counterText.textContent = 'PV ' + data.pv + ' · UV ' + data.uv; })
        .catch(() => { counterText.textContent = 'counter: offline'; });

      function toggleCounter() {
        const threshold = 70;
        const bottom = window.scrollY + window.innerHeight;
        const visible = bottom >= document.documentElement.scrollHeight - threshold;
        counter.style.opacity = visible ? '0.15' : '0';
        counter.style.pointerEvents = visible ? 'auto' : 'none';
      }
      window.addEventListener('scroll', toggleCounter);
      toggleCounter();
    </script>
  </body>
</html>
"""

_PHOTOBOOTH_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Photobooth</title>
    <style>
      body { margin: 0; color: #fff; background: #000; font-family: system-ui, sans-serif; }
      .container { position: relative; width: 100vw; height: 100vh; overflow: hidden; }
      .background {
        position: fixed; inset: 0; z-index: -1;
        background-size: cover; background-position: center;
      }
      .controls { position: fixed; top: 30px; z-index: 100; display: flex; gap: 12px; }
      .controls.left { left: 30px; }
      .controls.right { right: 30px; }
      .controls a { color: #fff; text-decoration: none; font-size: 18px; font-weight: 700; }
      button {
        color: #fff; background: rgba(0, 0, 0, 0.8); border: none;
        border-radius: 25px; padding: 12px 24px; font-size: 18px;
        font-weight: 700; cursor: pointer;
      }
      button:disabled { opacity: 0.5; cursor: not-allowed; }
      .stage {
        position: absolute; inset: 0; display: flex;
        align-items: center; justify-content: center;
      }
      video, img.still { width: 100%; height: 100%; object-fit: cover; }
      .mirrored { transform: scaleX(-1); }
      .overlay {
        position: absolute; inset: 0; display: flex; align-items: center;
        justify-content: center; background: rgba(0, 0, 0, 0.8);
        font-size: 22px; cursor: pointer;
      }
      .error {
        position: fixed; bottom: 30px; left: 50%; transform: translateX(-50%);
        background: rgba(255, 0, 0, 0.9); padding: 12px 24px;
        border-radius: 8px; font-size: 14px; z-index: 100;
      }
      [hidden] { display: none !important; }
    </style>
  </head>
  <body>
    <div class="container">
      <div class="background" id="background"></div>
      <div class="controls left"><a href="/" id="back">Back</a></div>
      <div class="controls right">
        <button id="mirror" type="button">Mirror</button>
        <button id="cancel" type="button" hidden>Retake</button>
        <button id="primary" type="button" disabled>Starting camera...</button>
      </div>
      <div class="stage">
        <video id="video" playsinline muted hidden></video>
        <img id="still" class="still" alt="Captured photo" hidden />
        <div class="overlay" id="placeholder">Tap to start camera</div>
        <div class="overlay" id="loading" hidden>Starting camera...</div>
      </div>
      <div class="error" id="error" hidden></div>
    </div>
    <script>
      const CONFIG = __CAPTURE_CONFIG__;
      const S = CONFIG.states;

      const els = {
        background: document.getElementById('background'),
        video: document.getElementById('video'),
        still: document.getElementById('still'),
        placeholder: document.getElementById('placeholder'),
        loading: document.getElementById('loading'),
        primary: document.getElementById('primary'),
        cancel: document.getElementById('cancel'),
        mirror: document.getElementById('mirror'),
        error: document.getElementById('error'),
      };

      // Owns the camera stream, the recorder and the captured frame.
      const booth = {
        state: S.IDLE,
        error: null,
        mirrored: true,
        stream: null,
        recorder: null,
        session: null,
        photo: null,
        photoUrl: null,

        transition(target, error) {
          const allowed = CONFIG.transitions[this.state] || [];
          if (!allowed.includes(target)) {
            throw new Error('Cannot go from ' + this.state + ' to ' + target);
          }
          this.state = target;
          this.error = error || null;
          render();
        },

        fail(err, fallback) {
          this.transition(S.ERROR, err instanceof Error ? err.message : fallback);
        },

        teardown() {
          this.stopRecording();
          if (this.stream) this.stream.getTracks().forEach((track) => track.stop());
          this.stream = null;
          els.video.srcObject = null;
          this.discardPhoto();
          this.state = S.IDLE;
          this.error = null;
        },

        discardPhoto() {
          if (this.photoUrl) URL.revokeObjectURL(this.photoUrl);
          this.photo = null;
          this.photoUrl = null;
        },

        startRecording() {
          if (typeof MediaRecorder === 'undefined' || !this.stream) return;
          const mimeType = CONFIG.mimePreferences.find((type) => MediaRecorder.isTypeSupported(type));
          if (!mimeType) return;
          const settings = this.stream.getVideoTracks()[0].getSettings();
          const longEdge = Math.max(settings.width || 0, settings.height || 0);
          const tier = CONFIG.recordingTiers.find((t) => longEdge >= t.minLongEdge);
          this.session = Date.now().toString(36) + '-' + Math.random().toString(36).slice(2, 10);
          const recorder = new MediaRecorder(this.stream, {
            mimeType: mimeType,
            videoBitsPerSecond: tier.bitrate,
          });
          const session = this.session;
          let index = 0;
          recorder.ondataavailable = (event) => {
            if (event.data && event.data.size > 0) {
              uploadChunk(event.data, session, index++, mimeType);
            }
          };
          recorder.start(tier.timesliceMs);
          this.recorder = recorder;
        },

        stopRecording() {
          const recorder = this.recorder;
          this.recorder = null;
          if (recorder && recorder.state !== 'inactive') {
            // stop() emits one final dataavailable event with the buffered tail.
            recorder.stop();
          }
        },
      };

      // Best-effort backup: the result is intentionally discarded.
      function uploadChunk(blob, session, index, mimeType) {
        const form = new FormData();
        form.append('file', blob, index + '.chunk');
        form.append('session', session);
        form.append('idx', String(index));
        form.append('type', mimeType);
        fetch(CONFIG.chunkUploadUrl, { method: 'POST', body: form, keepalive: blob.size < 60000 })
          .catch(() => {});
      }

      function render() {
        const state = booth.state;
        const live = state === S.CAMERA_READY || state === S.CAMERA_STARTING;
        const captured = state === S.PHOTO_TAKEN || state === S.UPLOADING || state === S.DONE;
        els.placeholder.hidden = !(state === S.IDLE || state === S.ERROR);
        els.placeholder.textContent = state === S.ERROR ? 'Tap to try again' : 'Tap to start camera';
        els.loading.hidden = state !== S.CAMERA_STARTING;
        els.video.hidden = !live;
        els.still.hidden = !captured;
        els.video.classList.toggle('mirrored', booth.mirrored);
        els.cancel.hidden = state !== S.PHOTO_TAKEN;
        els.primary.disabled = !(state === S.CAMERA_READY || state === S.PHOTO_TAKEN);
        els.primary.textContent = {
          [S.IDLE]: 'Take photo',
          [S.CAMERA_STARTING]: 'Starting camera...',
          [S.CAMERA_READY]: 'Take photo',
          [S.PHOTO_TAKEN]: 'Use as background',
          [S.UPLOADING]: '...',
          [S.DONE]: 'Done!',
          [S.ERROR]: 'Take photo',
        }[state];
        els.error.hidden = !booth.error;
        els.error.textContent = booth.error || '';
      }

      async function startCamera() {
        if (booth.state !== S.IDLE && booth.state !== S.ERROR) return;
        if (booth.stream) booth.teardown();
        booth.transition(S.CAMERA_STARTING);
        try {
          const stream = await navigator.mediaDevices.getUserMedia({ video: true, audio: true })
            .catch(() => navigator.mediaDevices.getUserMedia({ video: true, audio: false }));
          booth.stream = stream;
          els.video.srcObject = stream;
          await els.video.play();
          if (!els.video.videoWidth) {
            await new Promise((resolve) => { els.video.onloadedmetadata = resolve; });
          }
          booth.transition(S.CAMERA_READY);
          try {
            booth.startRecording();
          } catch (err) {
            booth.recorder = null;
          }
        } catch (err) {
          if (booth.stream) booth.stream.getTracks().forEach((track) => track.stop());
          booth.stream = null;
          booth.fail(err, 'Camera permission denied');
        }
      }

      async function takePhoto() {
        const video = els.video;
        if (booth.state !== S.CAMERA_READY || !video.videoWidth) return;
        try {
          const scale = Math.min(1, CONFIG.photoMaxWidth / video.videoWidth);
          const width = Math.round(video.videoWidth * scale);
          const height = Math.round(video.videoHeight * scale);
          const canvas = document.createElement('canvas');
          canvas.width = width;
          canvas.height = height;
          const ctx = canvas.getContext('2d');
          if (booth.mirrored) {
            ctx.translate(width, 0);
            ctx.scale(-1, 1);
          }
          ctx.drawImage(video, 0, 0, width, height);
          const blob = await new Promise((resolve, reject) => {
            canvas.toBlob(
              (b) => (b ? resolve(b) : reject(new Error('Could not encode photo'))),
              'image/jpeg',
              CONFIG.photoJpegQuality,
            );
          });
          booth.photo = blob;
          booth.photoUrl = URL.createObjectURL(blob);
          els.still.src = booth.photoUrl;
          booth.transition(S.PHOTO_TAKEN);
        } catch (err) {
          booth.fail(err, 'Could not capture photo');
        }
      }

      function cancelPhoto() {
        if (booth.state !== S.PHOTO_TAKEN) return;
        booth.discardPhoto();
        booth.transition(S.CAMERA_READY);
      }

      async function uploadPhoto() {
        if (booth.state !== S.PHOTO_TAKEN || !booth.photo) return;
        booth.transition(S.UPLOADING);
        try {
          const form = new FormData();
          form.append('file', booth.photo, 'capture.jpg');
          const res = await fetch(CONFIG.uploadUrl, { method: 'POST', body: form });
          if (!res.ok) {
            const text = await res.text();
            throw new Error(text || 'Upload failed');
          }
          const json = await res.json();
          els.background.style.backgroundImage = 'url(/bg?v=' + (json.version || Date.now()) + ')';
          booth.stopRecording();
          booth.transition(S.DONE);
          setTimeout(() => { window.location.href = '/'; }, CONFIG.redirectDelayMs);
        } catch (err) {
          booth.transition(S.PHOTO_TAKEN, err instanceof Error ? err.message : 'Unknown error');
        }
      }

      els.placeholder.addEventListener('click', startCamera);
      els.cancel.addEventListener('click', cancelPhoto);
      els.mirror.addEventListener('click', () => {
        booth.mirrored = !booth.mirrored;
        render();
      });
      els.primary.addEventListener('click', () => {
        if (booth.state === S.CAMERA_READY) takePhoto();
        else if (booth.state === S.PHOTO_TAKEN) uploadPhoto();
      });
      document.addEventListener('visibilitychange', () => {
        if (document.hidden) {
          booth.stopRecording();
        } else if (booth.stream && !booth.recorder && booth.state !== S.DONE) {
          try { booth.startRecording(); } catch (err) { booth.recorder = null; }
        }
      });
      window.addEventListener('pagehide', () => booth.teardown());
      els.background.style.backgroundImage = 'url(/bg?v=' + Date.now() + ')';
      render();
    </script>
  </body>
</html>
"""
