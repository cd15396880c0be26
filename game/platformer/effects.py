"""
Cosmetic effect state owned by the simulation and read by the renderer:
particles and camera shake.
"""

from __future__ import annotations

import random
from typing import List

from .entities import Particle

PARTICLE_GRAVITY = 0.2


class Effects:
    """Particle list plus the current camera shake"""

    def __init__(self, rng: random.Random):
        self.rng = rng
        self.particles: List[Particle] = []
        self.shake_intensity = 0.0
        self.shake_duration = 0

    def clear(self):
        self.particles = []

    def explosion(self, x: float, y: float, color: str):
        r = self.rng
        for _ in range(15):
            self.particles.append(Particle(
                x, y, (r.random() - 0.5) * 8, (r.random() - 0.5) * 8,
                color, 3 + r.random() * 4, 30, 30,
            ))

    def sparkles(self, x: float, y: float):
        r = self.rng
        for _ in range(5):
            self.particles.append(Particle(
                x + (r.random() - 0.5) * 20, y + (r.random() - 0.5) * 20,
                0.0, -1 - r.random(), "#facc15", 2, 40, 40,
            ))

    def dust(self, x: float, y: float):
        r = self.rng
        for _ in range(3):
            self.particles.append(Particle(
                x + (r.random() - 0.5) * 20, y,
                (r.random() - 0.5) * 1, -0.5, "#ffffff", 2, 20, 20,
            ))

    def shake(self, intensity: float, duration: int):
        self.shake_intensity = intensity
        self.shake_duration = duration

    def update(self):
        """Advance particles one frame and decay the shake"""
        alive = []
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.vy += PARTICLE_GRAVITY
            p.life -= 1
            if p.life > 0:
                alive.append(p)
        self.particles = alive

        if self.shake_duration > 0:
            self.shake_duration -= 1
            self.shake_intensity *= 0.9
        else:
            self.shake_intensity = 0.0
