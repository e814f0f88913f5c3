"""Scripts executed in the page context of the session under test."""

from __future__ import annotations

# Outer size can be 0 on some mobile drivers; clientWidth excludes the scrollbar.
GET_SCREEN_DIMENSIONS = """
() => ({
    fullPageHeight: document.body.scrollHeight,
    fullPageWidth: document.body.scrollWidth,
    height: window.outerHeight,
    pixelRatio: window.devicePixelRatio,
    viewPortHeight: window.innerHeight,
    viewPortWidth: document.body.clientWidth,
    width: window.outerWidth,
})
"""

HIDE_SCROLLBARS = """
(hide) => {
    document.body.style.overflow = hide ? 'hidden' : '';
}
"""

ADD_SHADOW_PADDING = """
([addressBarShadowPadding, toolBarShadowPadding]) => {
    const head = document.head || document.getElementsByTagName('head')[0];
    const style = document.createElement('style');
    const paddingBottom = toolBarShadowPadding === 0
        ? '' : `body{padding-bottom:${toolBarShadowPadding}px !important}`;
    const paddingTop = addressBarShadowPadding === 0
        ? '' : `body{padding-top:${addressBarShadowPadding}px !important}`;
    style.type = 'text/css';
    style.appendChild(document.createTextNode(`${paddingBottom} ${paddingTop}`));
    head.appendChild(style);
}
"""

DISABLE_CSS_ANIMATIONS = """
() => {
    const head = document.head || document.getElementsByTagName('head')[0];
    const style = document.createElement('style');
    style.type = 'text/css';
    style.appendChild(document.createTextNode(`* {
        -webkit-transition-duration: 0s !important;
        transition-duration: 0s !important;
        -webkit-animation-duration: 0s !important;
        animation-duration: 0s !important;
        transition: none !important;
    }`));
    head.appendChild(style);
}
"""

# Position relative to the top of the page.
GET_ELEMENT_POSITION_TOP_PAGE = """
(element) => {
    const rect = element.getBoundingClientRect();
    return {
        x: rect.left + window.pageXOffset,
        y: rect.top + window.pageYOffset,
        width: rect.width,
        height: rect.height,
    };
}
"""

# Position relative to the top of the visible window.
GET_ELEMENT_POSITION_TOP_WINDOW = """
(element) => {
    const rect = element.getBoundingClientRect();
    return {x: rect.left, y: rect.top, width: rect.width, height: rect.height};
}
"""

GET_CANVAS_DATA_URL = """
(canvas) => canvas.toDataURL('image/png')
"""
